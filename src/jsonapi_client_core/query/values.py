"""Rendering of Python values into query strings and JSON bodies."""

from dataclasses import asdict, is_dataclass
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any


def iso8601_utc(value: datetime) -> str:
    """`2021-01-01T00:00:00.000Z`; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def query_value(value: Any) -> str:
    """Render a filter value as a query string value.

    Lists and tuples become comma-joined values in order.
    """
    if hasattr(value, "query_value"):
        return value.query_value
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return iso8601_utc(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join(query_value(item) for item in value)
    return str(value)


def json_value(value: Any) -> Any:
    """Convert a value into something `json.dumps` accepts, rendering dates and enums as strings."""
    if hasattr(value, "query_value"):
        return value.query_value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return iso8601_utc(value)
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return json_value(asdict(value))
    if isinstance(value, dict):
        return {str(key): json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [json_value(item) for item in value]
    return value
