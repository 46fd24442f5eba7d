"""Filter, sort and include tokens and the query parameters they render to."""

from jsonapi_client_core.query.builder import DEFAULT_PAGE_SIZE, QueryParams, get_query, list_query
from jsonapi_client_core.query.filters import (
    FilterItem,
    RestFilterItem,
    filter_queries,
    joint_label,
    merged_key_values,
)
from jsonapi_client_core.query.tokens import IncludeField, SortField, join_tokens
from jsonapi_client_core.query.values import iso8601_utc, json_value, query_value

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FilterItem",
    "IncludeField",
    "QueryParams",
    "RestFilterItem",
    "SortField",
    "filter_queries",
    "get_query",
    "iso8601_utc",
    "join_tokens",
    "joint_label",
    "json_value",
    "list_query",
    "merged_key_values",
    "query_value",
]
