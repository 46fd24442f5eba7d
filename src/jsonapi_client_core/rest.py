"""Helpers for plain REST endpoints that do not speak JSON:API.

Item classes carry their endpoint settings as class attributes:

    ```python
    @dataclass(frozen=True)
    class Device:
        resource_path: ClassVar[str | None] = "devices"
        supports_pagination: ClassVar[bool] = True
        filter_method: ClassVar[FilterMethod] = FilterMethod.POST_FORM

        id: str
        display_name: str  # wire key: displayName

    page = await fetch_list(Device, filters=[DeviceFilter.owner("me")], page_index=2)
    ```

Responses are bare JSON arrays or objects, decoded with the item class's
`from_json` when it has one, as a dataclass otherwise.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, is_dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from jsonapi_client_core.client import Decodable, JsonApiClient
from jsonapi_client_core.document.resource import dataclass_from_wire
from jsonapi_client_core.query.builder import DEFAULT_PAGE_SIZE
from jsonapi_client_core.query.filters import FilterItem, filter_queries, merged_key_values
from jsonapi_client_core.resources import resource_item_path, resource_path_of
from jsonapi_client_core.transport.requests import ContentType, encode_json, form_body, json_body

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FilterMethod(str, Enum):
    """How `fetch_list` sends its filters."""

    QUERY = "query"
    POST_FORM = "post_form"
    POST_JSON = "post_json"


def decode_item(item_type: type[T], payload: Any) -> T:
    """Decode one item with `item_type.from_json`, or field by field for a dataclass.

    Raises:
        ValueError: If the payload has the wrong shape.
    """
    from_json = getattr(item_type, "from_json", None)
    if from_json is not None:
        return from_json(payload)
    if is_dataclass(item_type):
        if not isinstance(payload, Mapping):
            raise ValueError(f"{item_type.__name__} must be decoded from a JSON object")
        return dataclass_from_wire(item_type, payload)
    return item_type(payload)  # type: ignore[call-arg]


class _ResponseType(Generic[T]):
    def __init__(self, response_cls: type, item_type: type[T]):
        self.response_cls = response_cls
        self.item_type = item_type

    def from_json(self, payload: Any) -> Any:
        return self.response_cls.from_json(payload, self.item_type)

    def __repr__(self) -> str:
        return f"{self.response_cls.__name__}.of({self.item_type.__name__})"


@dataclass(frozen=True)
class SimpleListResponse(Generic[T]):
    """A bare JSON array of items."""

    items: list[T] = field(default_factory=list)

    @classmethod
    def of(cls, item_type: type[T]) -> "_ResponseType[T]":
        return _ResponseType(cls, item_type)

    @classmethod
    def from_json(cls, payload: Any, item_type: type[T]) -> "SimpleListResponse[T]":
        if not isinstance(payload, list):
            raise ValueError("Expected a JSON array")
        return cls(items=[decode_item(item_type, item) for item in payload])

    @property
    def has_next_page(self) -> bool:
        return False


@dataclass(frozen=True)
class SimpleSingleResponse(Generic[T]):
    """A bare JSON object holding one item."""

    item: T | None = None

    @classmethod
    def of(cls, item_type: type[T]) -> "_ResponseType[T]":
        return _ResponseType(cls, item_type)

    @classmethod
    def from_json(cls, payload: Any, item_type: type[T]) -> "SimpleSingleResponse[T]":
        return cls(item=decode_item(item_type, payload))


def _item_path(item_cls: type, item_id: str | None) -> str:
    return resource_item_path(item_cls, item_id) if item_id is not None else resource_path_of(item_cls)


async def fetch_list(
    item_cls: type[T],
    *,
    filters: Iterable[FilterItem] | None = None,
    page_index: int = 0,
    page_size: int = DEFAULT_PAGE_SIZE,
    into: Decodable[Any] | None = None,
    client: JsonApiClient | None = None,
) -> Any:
    """Fetch a collection, sending filters the way `item_cls.filter_method` says.

    When the class supports pagination and the delegate names pagination
    keys, the page index and size are sent with the filters.

    Returns:
        `SimpleListResponse` of `item_cls` unless `into` says otherwise
    """
    client = client or JsonApiClient.shared()
    path = resource_path_of(item_cls)
    into = into or SimpleListResponse.of(item_cls)
    filters = list(filters or ())

    paging: list[tuple[str, int]] = []
    pagination = client.delegate.pagination_params
    if getattr(item_cls, "supports_pagination", True) and pagination is not None:
        paging = [(pagination.index_key, page_index), (pagination.size_key, page_size)]

    method = FilterMethod(getattr(item_cls, "filter_method", FilterMethod.QUERY))
    if method is FilterMethod.QUERY:
        queries = filter_queries(filters) + [(key, str(value)) for key, value in paging]
        request = client.build_request("GET", client.url_for(path, queries))
    elif method is FilterMethod.POST_FORM:
        queries = filter_queries(filters) + [(key, str(value)) for key, value in paging]
        request = client.build_request(
            "POST",
            client.url_for(path),
            content=form_body(queries),
            content_type=ContentType.FORM_URLENCODED,
        )
    else:
        key_values = merged_key_values(filters)
        key_values.update(paging)
        request = client.build_request("POST", client.url_for(path), content=json_body(key_values or None))

    logger.debug(f"Listing {item_cls.__name__} via {method.value}")
    return await client.send(request, into)


async def fetch_one(
    item_cls: type[T],
    item_id: str | None = None,
    *,
    filters: Iterable[FilterItem] | None = None,
    into: Decodable[Any] | None = None,
    client: JsonApiClient | None = None,
) -> Any:
    """GET `{resource_path}/{item_id}` (or the bare path without an id)."""
    client = client or JsonApiClient.shared()
    url = client.url_for(_item_path(item_cls, item_id), filter_queries(filters))
    return await client.send(client.build_request("GET", url), into or SimpleSingleResponse.of(item_cls))


async def create(
    item_cls: type[T],
    body: Any = None,
    *,
    filters: Iterable[FilterItem] | None = None,
    into: Decodable[Any] | None = None,
    client: JsonApiClient | None = None,
) -> Any:
    """POST `body` as JSON to the collection path; no body sends `{}`."""
    client = client or JsonApiClient.shared()
    request = client.build_request(
        "POST",
        client.url_for(resource_path_of(item_cls), filter_queries(filters)),
        content=encode_json(body if body is not None else {}),
    )
    return await client.send(request, into or SimpleSingleResponse.of(item_cls))


async def update(
    item_cls: type[T],
    item_id: str | None,
    body: Any = None,
    *,
    filters: Iterable[FilterItem] | None = None,
    into: Decodable[Any] | None = None,
    client: JsonApiClient | None = None,
) -> Any:
    """PUT `body` as JSON to `{resource_path}/{item_id}`."""
    client = client or JsonApiClient.shared()
    request = client.build_request(
        "PUT",
        client.url_for(_item_path(item_cls, item_id), filter_queries(filters)),
        content=encode_json(body if body is not None else {}),
    )
    return await client.send(request, into or SimpleSingleResponse.of(item_cls))


async def delete(
    item_cls: type,
    item_id: str | None,
    *,
    filters: Iterable[FilterItem] | None = None,
    client: JsonApiClient | None = None,
) -> bool:
    """DELETE `{resource_path}/{item_id}`; True when the server answers 2xx."""
    client = client or JsonApiClient.shared()
    url = client.url_for(_item_path(item_cls, item_id), filter_queries(filters))
    return await client.send_ok(client.build_request("DELETE", url))
