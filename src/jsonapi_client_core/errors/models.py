"""JSON:API error objects.

See: https://jsonapi.org/format/#errors
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

_STRING_FIELDS = ("id", "status", "code", "title", "detail")


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ValueError(f"Error member {key!r} must be a string, got {type(value).__name__}")
    return str(value)


@dataclass(frozen=True)
class DomainError:
    """One element of a JSON:API `errors` array."""

    id: str | None = None
    status: str | None = None  # HTTP status code, as a string on the wire
    code: str | None = None  # Application-specific error code
    title: str | None = None
    detail: str | None = None
    meta: dict[str, Any] | None = None

    @property
    def status_value(self) -> int:
        """The `status` member as an integer, or -1 when absent or not numeric."""
        try:
            return int(self.status) if self.status is not None else -1
        except ValueError:
            return -1

    @classmethod
    def from_json(cls, data: Any) -> "DomainError":
        if not isinstance(data, Mapping):
            raise ValueError("Error object must be a JSON object")
        meta = data.get("meta")
        if meta is not None and not isinstance(meta, Mapping):
            raise ValueError("Error member 'meta' must be an object")
        return cls(
            **{key: _optional_str(data, key) for key in _STRING_FIELDS},
            meta=dict(meta) if meta is not None else None,
        )

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for key in _STRING_FIELDS:
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        if self.meta is not None:
            payload["meta"] = dict(self.meta)
        return payload

    def to_exception_message(self) -> str:
        """Single-line summary used in exception messages."""
        parts = []
        if self.status:
            parts.append(f"[{self.status}]")
        if self.code:
            parts.append(self.code)
        if self.title:
            parts.append(self.title)
        if self.detail and self.detail != self.title:
            parts.append(f"- {self.detail}" if parts else self.detail)
        return " ".join(parts) if parts else "Unknown API error"


@dataclass(frozen=True)
class ErrorDocument:
    """Top-level `{ "errors": [...] }` document."""

    errors: list[DomainError]

    @classmethod
    def from_json(cls, payload: Any) -> "ErrorDocument":
        if not isinstance(payload, Mapping) or not isinstance(payload.get("errors"), list):
            raise ValueError("Not a JSON:API error document")
        return cls(errors=[DomainError.from_json(item) for item in payload["errors"]])

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorDocument | None":
        """Parse an error document from an HTTP response.

        Args:
            response: HTTP response object

        Returns:
            ErrorDocument or None if the body is not a JSON:API error document
        """
        try:
            return cls.from_json(response.json())
        except (ValueError, TypeError, AttributeError):
            # JSON decode errors, wrong shape, or missing .json() method
            return None

    def to_json(self) -> dict[str, Any]:
        return {"errors": [error.to_json() for error in self.errors]}

    def to_exception_message(self) -> str:
        if not self.errors:
            return "Unknown API error"
        return "\n".join(error.to_exception_message() for error in self.errors)
