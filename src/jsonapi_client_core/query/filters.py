"""Typed filter tokens rendered into query parameters.

A filter type subclasses `FilterItem` and exposes one constructor per case.
A case holds either one value or several named fields:

    ```python
    class TaskFilter(FilterItem):
        key_overrides = {"search": "search.keyword", "dateStartFrom": "startDate"}

        @classmethod
        def search(cls, keyword: str) -> "TaskFilter":
            return cls("search", keyword)

        @classmethod
        def date(cls, start_from: datetime, end_on: datetime) -> "TaskFilter":
            return cls("date", start_from=start_from, end_on=end_on)
    ```

`TaskFilter.search("x")` renders `filter[search.keyword]=x`;
`TaskFilter.date(a, b)` renders `filter[startDate]=...` and
`filter[dateEndOn]=...`.
"""

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from jsonapi_client_core.query.values import query_value

_UNSET = object()


def joint_label(case: str, field_name: str) -> str:
    """Case name plus the field name in capitalized camel case (`date` + `start_from` -> `dateStartFrom`)."""
    return case + "".join(part[:1].upper() + part[1:] for part in field_name.split("_") if part)


class FilterItem:
    """One filter case with its values.

    Attributes:
        key_overrides: Maps a case name, or a joined case+field name, to the
            key the server expects.
    """

    key_overrides: ClassVar[Mapping[str, str]] = {}

    def __init__(self, case: str, value: Any = _UNSET, /, **fields: Any):
        if (value is _UNSET) == (not fields):
            raise TypeError(f"Filter case {case!r} takes either one value or named fields")
        self.case = case
        if value is not _UNSET:
            self._fields: tuple[tuple[str | None, Any], ...] = ((None, value),)
        elif len(fields) == 1:
            self._fields = ((None, next(iter(fields.values()))),)
        else:
            self._fields = tuple(fields.items())

    @classmethod
    def key_for(cls, label: str) -> str:
        return cls.key_overrides.get(label, label)

    @classmethod
    def query_name(cls, key: str) -> str:
        return f"filter[{key}]"

    def key_values(self) -> list[tuple[str, Any]]:
        """Ordered `(key, raw value)` pairs, one per field."""
        return [
            (self.key_for(self.case if name is None else joint_label(self.case, name)), value)
            for name, value in self._fields
        ]

    def queries(self) -> list[tuple[str, str]]:
        return [(self.query_name(key), query_value(value)) for key, value in self.key_values()]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.case == other.case and self._fields == other._fields

    def __hash__(self) -> int:
        return hash((type(self), self.case))

    def __repr__(self) -> str:
        args = ", ".join(repr(value) if name is None else f"{name}={value!r}" for name, value in self._fields)
        return f"{type(self).__name__}({self.case!r}, {args})"


class RestFilterItem(FilterItem):
    """Filter for plain REST endpoints: keys are sent bare, without `filter[...]`."""

    @classmethod
    def query_name(cls, key: str) -> str:
        return key


def filter_queries(items: Iterable[FilterItem] | None) -> list[tuple[str, str]]:
    return [query for item in items or () for query in item.queries()]


def merged_key_values(items: Iterable[FilterItem] | None) -> dict[str, Any]:
    """Merge the key/value pairs of several filters; a later key replaces an earlier one."""
    merged: dict[str, Any] = {}
    for item in items or ():
        merged.update(item.key_values())
    return merged
