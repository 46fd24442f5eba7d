"""Top-level JSON:API documents: primary data, included resources, links and meta."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

import httpx

from jsonapi_client_core.document.registry import ResourceRegistry, default_registry
from jsonapi_client_core.document.relationship import link_value
from jsonapi_client_core.document.resolver import collect_resolved, index_included, resolve_resource
from jsonapi_client_core.document.resource import Resource

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Resource)


@dataclass(frozen=True)
class Links:
    """Document links, including the pagination window."""

    self_link: str | None = None
    related: str | None = None
    first: str | None = None
    last: str | None = None
    next: str | None = None
    prev: str | None = None

    _WIRE_NAMES = (
        ("self_link", "self"),
        ("related", "related"),
        ("first", "first"),
        ("last", "last"),
        ("next", "next"),
        ("prev", "prev"),
    )

    @classmethod
    def empty(cls) -> "Links":
        return cls()

    @classmethod
    def from_json(cls, data: Any) -> "Links | None":
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise ValueError("Document links must be a JSON object")
        return cls(**{name: link_value(data, wire) for name, wire in cls._WIRE_NAMES})

    def to_json(self) -> dict[str, str]:
        return {wire: value for name, wire in self._WIRE_NAMES if (value := getattr(self, name)) is not None}


@dataclass(frozen=True)
class Meta:
    """Document meta. `totalResourceCount` is typed; other members land in `extra`."""

    total_resource_count: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> "Meta | None":
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise ValueError("Document meta must be a JSON object")
        total = data.get("totalResourceCount")
        if total is not None and (isinstance(total, bool) or not isinstance(total, int)):
            raise ValueError(f"totalResourceCount must be an integer, got {total!r}")
        extra = {key: value for key, value in data.items() if key != "totalResourceCount"}
        return cls(total_resource_count=total, extra=extra)

    def to_json(self) -> dict[str, Any]:
        payload = dict(self.extra)
        if self.total_resource_count is not None:
            payload["totalResourceCount"] = self.total_resource_count
        return payload


@dataclass(frozen=True)
class Document(Generic[R]):
    """A decoded JSON:API response document.

    `data` is always a list, whether the wire carried one resource object or
    an array of them.
    """

    data: list[R] = field(default_factory=list)
    included: list[Resource] | None = None
    links: Links | None = None
    meta: Meta | None = None
    resource_type: type[R] | None = field(default=None, compare=False, repr=False)

    @classmethod
    def empty(cls) -> "Document[R]":
        return cls(links=Links.empty())

    @classmethod
    def of(cls, resource_type: type[R], registry: ResourceRegistry | None = None) -> "DocumentType[R]":
        """Decode target for the client: `client.send(request, Document.of(Article))`."""
        return DocumentType(resource_type, registry)

    @property
    def datum(self) -> R | None:
        return self.data[0] if self.data else None

    # Decoding

    @classmethod
    def from_json(
        cls,
        payload: Any,
        resource_type: type[R],
        *,
        registry: ResourceRegistry | None = None,
        resolve: bool = True,
    ) -> "Document[R]":
        """Decode a document and, unless `resolve` is False, fold `included` into the graph.

        Raises:
            ValueError: If the payload is not a valid document.
            UnknownResourceTypeError: If an included entry's type is not registered.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("JSON:API document must be a JSON object")
        if "data" not in payload:
            raise ValueError("JSON:API document has no 'data' member")

        raw = payload["data"]
        if raw is None:
            items = []
        elif isinstance(raw, list):
            items = raw
        else:
            items = [raw]
        data = [resource_type.from_json(item) for item in items]

        included = None
        if payload.get("included") is not None:
            if not isinstance(payload["included"], list):
                raise ValueError("'included' must be an array")
            registry = registry or default_registry
            included = [registry.decode(item) for item in payload["included"]]

        document = cls(
            data=data,
            included=included,
            links=Links.from_json(payload.get("links")),
            meta=Meta.from_json(payload.get("meta")),
            resource_type=resource_type,
        )
        return document.resolved() if resolve else document

    def to_json(self) -> dict[str, Any]:
        """Encode the document.

        A resolved document has no `included` of its own; the resources its
        relationships resolved to are written back under `included` so that
        decoding the result rebuilds the same graph.
        """
        payload: dict[str, Any] = {"data": [resource.to_json() for resource in self.data]}
        included = self.included if self.included is not None else collect_resolved(self.data)
        if self.included is not None or included:
            payload["included"] = [resource.to_json() for resource in included]
        if self.links is not None:
            payload["links"] = self.links.to_json()
        if self.meta is not None:
            payload["meta"] = self.meta.to_json()
        return payload

    # Included resources

    def included_index(self) -> dict[str, list[Resource]] | None:
        if self.included is None:
            return None
        return index_included(self.included)

    def resolved(self) -> "Document[R]":
        """Resolve primary relationships against `included`, then drop `included`."""
        index = self.included_index()
        if index is None:
            return replace(self, included=None)
        return replace(self, data=[resolve_resource(resource, index) for resource in self.data], included=None)

    # Pagination

    @property
    def next_page_url(self) -> str | None:
        """The `next` link, only when it is an absolute URL with scheme and host."""
        next_link = self.links.next if self.links else None
        if not next_link:
            return None
        try:
            url = httpx.URL(next_link)
        except httpx.InvalidURL:
            logger.debug(f"Ignoring malformed next link: {next_link!r}")
            return None
        if not url.scheme or not url.host:
            return None
        return next_link

    @property
    def has_next_page(self) -> bool:
        return self.next_page_url is not None

    def appending(self, page: "Document[R]") -> "Document[R]":
        """Merge the following page into this one.

        Primary data and included resources are concatenated in order;
        `first`, `self`, `related` and `prev` come from this document, `last`
        and `next` from `page`; meta is taken from `page`.
        """
        if self.included is not None and page.included is not None:
            included = [*self.included, *page.included]
        else:
            included = self.included if self.included is not None else page.included

        mine = self.links or Links.empty()
        theirs = page.links or Links.empty()
        return replace(
            self,
            data=[*self.data, *page.data],
            included=included,
            links=Links(
                self_link=mine.self_link,
                related=mine.related,
                first=mine.first,
                last=theirs.last,
                next=theirs.next,
                prev=mine.prev,
            ),
            meta=page.meta,
        )


class DocumentType(Generic[R]):
    """Decode target binding a resource type (and registry) for the client."""

    def __init__(self, resource_type: type[R], registry: ResourceRegistry | None = None):
        self.resource_type = resource_type
        self.registry = registry

    def from_json(self, payload: Any) -> Document[R]:
        return Document.from_json(payload, self.resource_type, registry=self.registry)

    def __repr__(self) -> str:
        return f"Document.of({self.resource_type.__name__})"


class EmptyResponse:
    """Decode target for endpoints that answer with an empty body.

    An empty body yields `EmptyResponse()` without parsing; a non-empty body
    is a decode failure.
    """

    empty_body = True

    @classmethod
    def from_json(cls, payload: Any) -> "EmptyResponse":
        raise ValueError("EmptyResponse should not be decoded!")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EmptyResponse)

    def __hash__(self) -> int:
        return hash(EmptyResponse)
