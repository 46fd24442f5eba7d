"""JSON:API resource objects.

Concrete resources subclass `Resource`, set `type_name`, and may declare
nested `Attributes` and `Relationships` dataclasses for typed payloads:

    ```python
    class Article(Resource):
        type_name = "articles"
        resource_path = "articles"

        @dataclass(frozen=True)
        class Attributes:
            title: str
            word_count: int | None = None  # wire key: wordCount

        @dataclass(frozen=True)
        class Relationships:
            author: Relationship | None = None

    Article.register()  # or decorate the class with @registered
    ```

Without those declarations attributes stay a plain dict and relationships a
`dict[str, Relationship]`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, ClassVar

from jsonapi_client_core.document.registry import ResourceRegistry, default_registry
from jsonapi_client_core.document.relationship import Relationship
from jsonapi_client_core.errors.exceptions import LocalError


def camel_case(name: str) -> str:
    """`word_count` -> `wordCount`; names without underscores pass through."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _wire_value(data: Mapping[str, Any], name: str) -> tuple[bool, Any]:
    for key in (name, camel_case(name)):
        if key in data:
            return True, data[key]
    return False, None


def dataclass_from_wire(data_type: type, data: Mapping[str, Any]) -> Any:
    """Build `data_type` from an object whose keys are the field names or their camelCase forms.

    Raises:
        TypeError: If a field without a default is missing.
    """
    kwargs = {}
    for field in fields(data_type):
        present, value = _wire_value(data, field.name)
        if present:
            kwargs[field.name] = value
    return data_type(**kwargs)


@dataclass(frozen=True)
class SelfLinks:
    """The `links` member of a resource object."""

    self_link: str

    @classmethod
    def from_json(cls, data: Any) -> "SelfLinks | None":
        if data is None:
            return None
        if not isinstance(data, Mapping) or not isinstance(data.get("self"), str):
            raise ValueError("Resource links must be an object with a string 'self'")
        return cls(self_link=data["self"])

    def to_json(self) -> dict[str, str]:
        return {"self": self.self_link}


@dataclass(frozen=True, kw_only=True)
class Resource:
    """Base JSON:API resource object."""

    type_name: ClassVar[str] = ""

    id: str
    type: str = ""
    links: SelfLinks | None = None
    attributes: Any = None
    relationships: Any = None

    def __post_init__(self) -> None:
        if not self.type:
            object.__setattr__(self, "type", self.type_name)
        elif self.type_name and self.type != self.type_name:
            raise ValueError(f"{type(self).__name__} expects type {self.type_name!r}, got {self.type!r}")
        if not self.type:
            raise ValueError(f"{type(self).__name__} needs a resource type")

    # Registration

    @classmethod
    def register(cls, type_name: str | None = None, *, registry: ResourceRegistry | None = None) -> "type[Resource]":
        """Register `cls.from_json` as the decoder for its wire type name."""
        name = type_name or cls.type_name
        if not name:
            raise LocalError(f"{cls.__name__} has no type_name; pass one to register()")
        if cls.type_name and name != cls.type_name:
            raise LocalError(f"{cls.__name__} decodes {cls.type_name!r} resources, cannot register as {name!r}")
        (registry or default_registry).register(name, cls.from_json)
        return cls

    # Decoding

    @classmethod
    def decode_attributes(cls, data: Any) -> Any:
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError("Resource attributes must be a JSON object")

        attributes_type = getattr(cls, "Attributes", None)
        if attributes_type is None:
            return dict(data)
        return dataclass_from_wire(attributes_type, data)

    @classmethod
    def decode_relationships(cls, data: Any) -> Any:
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise ValueError("Resource relationships must be a JSON object")

        relationships_type = getattr(cls, "Relationships", None)
        if relationships_type is None:
            return {name: Relationship.from_json(value) for name, value in data.items()}

        kwargs = {}
        for field in fields(relationships_type):
            present, value = _wire_value(data, field.name)
            if present and value is not None:
                kwargs[field.name] = Relationship.from_json(value)
        return relationships_type(**kwargs)

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "Resource":
        if not isinstance(payload, Mapping):
            raise ValueError("Resource object must be a JSON object")
        if not isinstance(payload.get("id"), str):
            raise ValueError("Resource object needs a string 'id'")
        if not isinstance(payload.get("type"), str):
            raise ValueError("Resource object needs a string 'type'")

        return cls(
            id=payload["id"],
            type=payload["type"],
            links=SelfLinks.from_json(payload.get("links")),
            attributes=cls.decode_attributes(payload.get("attributes")),
            relationships=cls.decode_relationships(payload.get("relationships")),
        )

    # Encoding

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "type": self.type}

        if is_dataclass(self.attributes):
            payload["attributes"] = {
                camel_case(field.name): getattr(self.attributes, field.name) for field in fields(self.attributes)
            }
        else:
            payload["attributes"] = dict(self.attributes or {})

        if is_dataclass(self.relationships):
            payload["relationships"] = {
                camel_case(field.name): value.to_json()
                for field in fields(self.relationships)
                if (value := getattr(self.relationships, field.name)) is not None
            }
        elif self.relationships is not None:
            payload["relationships"] = {name: value.to_json() for name, value in self.relationships.items()}

        if self.links is not None:
            payload["links"] = self.links.to_json()
        return payload


class GenericResource(Resource):
    """Placeholder resource accepting any type, with dict attributes and relationships."""

    pass


def registered(resource_cls: type[Resource] | None = None, *, registry: ResourceRegistry | None = None) -> Any:
    """Class decorator form of `Resource.register`.

        ```python
        @registered
        class Person(Resource):
            type_name = "people"

        @registered(registry=my_registry)
        class Comment(Resource):
            type_name = "comments"
        ```
    """
    if resource_cls is None:
        return lambda cls: cls.register(registry=registry)
    return resource_cls.register(registry=registry)
