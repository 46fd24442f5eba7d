"""Query parameter assembly for JSON:API collection and single-resource requests."""

from collections.abc import Iterable
from enum import Enum

from jsonapi_client_core.query.filters import FilterItem, filter_queries
from jsonapi_client_core.query.tokens import join_tokens

QueryParams = list[tuple[str, str]]

DEFAULT_PAGE_SIZE = 15


def include_query(include: Iterable[str | Enum] | None) -> QueryParams:
    value = join_tokens(include)
    return [("include", value)] if value else []


def sort_query(sort: Iterable[str | Enum] | None) -> QueryParams:
    value = join_tokens(sort)
    return [("sort", value)] if value else []


def list_query(
    filters: Iterable[FilterItem] | None = None,
    sort: Iterable[str | Enum] | None = None,
    include: Iterable[str | Enum] | None = None,
    page_size: int | None = DEFAULT_PAGE_SIZE,
) -> QueryParams:
    """Parameters for a collection request: `page[size]`, `sort`, filters, then `include`."""
    params: QueryParams = []
    if page_size is not None:
        params.append(("page[size]", str(page_size)))
    params.extend(sort_query(sort))
    params.extend(filter_queries(filters))
    params.extend(include_query(include))
    return params


def get_query(include: Iterable[str | Enum] | None = None) -> QueryParams:
    return include_query(include)
