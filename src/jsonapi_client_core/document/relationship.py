"""Relationship objects and their resource linkage."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jsonapi_client_core.document.resource import Resource


def link_value(data: Mapping[str, Any], key: str) -> str | None:
    """Read a link member, which is absent, null or a URL string."""
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Link {key!r} must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Linkage:
    """The `(type, id)` reference identifying a related resource."""

    id: str
    type: str

    @classmethod
    def from_json(cls, data: Any) -> "Linkage":
        if not isinstance(data, Mapping):
            raise ValueError("Resource linkage must be a JSON object")
        id_, type_ = data.get("id"), data.get("type")
        if not isinstance(id_, str) or not isinstance(type_, str):
            raise ValueError(f"Resource linkage needs string 'id' and 'type', got {dict(data)!r}")
        return cls(id=id_, type=type_)

    def to_json(self) -> dict[str, str]:
        return {"id": self.id, "type": self.type}


@dataclass(frozen=True)
class RelationshipLinks:
    """Relationship-level `self` and `related` links."""

    self_link: str | None = None
    related: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> "RelationshipLinks | None":
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise ValueError("Relationship links must be a JSON object")
        return cls(self_link=link_value(data, "self"), related=link_value(data, "related"))

    def to_json(self) -> dict[str, str]:
        payload = {}
        if self.self_link is not None:
            payload["self"] = self.self_link
        if self.related is not None:
            payload["related"] = self.related
        return payload


@dataclass(frozen=True)
class Relationship:
    """A JSON:API relationship.

    `data` holds the linkage as an ordered list whether the wire carried a
    single object or an array. `resolved` is filled only by resolving against
    an included set (see `document.resolver`) and is never serialized.
    """

    data: list[Linkage] | None = None
    links: RelationshipLinks | None = None
    resolved: "list[Resource] | None" = None

    @classmethod
    def empty(cls) -> "Relationship":
        return cls()

    @property
    def linkage(self) -> list[Linkage]:
        return list(self.data) if self.data else []

    @property
    def is_resolved(self) -> bool:
        return self.resolved is not None

    @classmethod
    def from_json(cls, payload: Any) -> "Relationship":
        if not isinstance(payload, Mapping):
            raise ValueError("Relationship must be a JSON object")

        raw = payload.get("data")
        if raw is None:
            data = None
        elif isinstance(raw, list):
            data = [Linkage.from_json(item) for item in raw]
        else:
            data = [Linkage.from_json(raw)]

        return cls(data=data, links=RelationshipLinks.from_json(payload.get("links")))

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.data is not None:
            payload["data"] = [linkage.to_json() for linkage in self.data]
        if self.links is not None:
            payload["links"] = self.links.to_json()
        return payload
