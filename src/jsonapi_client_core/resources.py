"""Fetch JSON:API resources by id or as filtered, sorted collections.

A resource class names its collection path and, optionally, the filter, sort
and include token types it accepts:

    ```python
    class Article(Resource):
        type_name = "articles"
        resource_path = "articles"
        filter_type = ArticleFilter
        sort_type = ArticleSort
        include_type = ArticleInclude

    document = await list_resources(Article, sort=[ArticleSort.CREATED.desc], include=[ArticleInclude.AUTHOR])
    ```
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any, ClassVar, Protocol, TypeVar, runtime_checkable
from urllib.parse import quote

from jsonapi_client_core.client import JsonApiClient
from jsonapi_client_core.document.document import Document
from jsonapi_client_core.document.resource import Resource
from jsonapi_client_core.errors.exceptions import LocalError
from jsonapi_client_core.query.builder import DEFAULT_PAGE_SIZE, get_query, list_query
from jsonapi_client_core.query.filters import FilterItem

R = TypeVar("R", bound=Resource)


@runtime_checkable
class ResourceSpec(Protocol):
    resource_path: ClassVar[str | None]
    filter_type: ClassVar[type[FilterItem] | None]
    sort_type: ClassVar[type[Enum] | None]
    include_type: ClassVar[type[Enum] | None]


def resource_path_of(resource_cls: type[Any]) -> str:
    path = getattr(resource_cls, "resource_path", None)
    if not path:
        raise LocalError(f"{resource_cls.__name__}.resource_path is not set")
    return path.rstrip("/")


def resource_item_path(resource_cls: type[Any], resource_id: str) -> str:
    """`{resource_path}/{resource_id}` with the id percent-encoded as a single path segment."""
    return f"{resource_path_of(resource_cls)}/{quote(str(resource_id), safe='')}"


async def get_resource(
    resource_cls: type[R],
    resource_id: str,
    *,
    include: Iterable[str | Enum] | None = None,
    client: JsonApiClient | None = None,
) -> Document[R]:
    """GET `{resource_path}/{resource_id}`, resolving any included resources.

    Raises:
        LocalError: If the client is not configured or the class has no path.
    """
    client = client or JsonApiClient.shared()
    url = client.url_for(resource_item_path(resource_cls, resource_id), get_query(include))
    return await client.send(client.build_request("GET", url), Document.of(resource_cls, client.registry))


async def list_resources(
    resource_cls: type[R],
    *,
    filters: Iterable[FilterItem] | None = None,
    sort: Iterable[str | Enum] | None = None,
    include: Iterable[str | Enum] | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    client: JsonApiClient | None = None,
) -> Document[R]:
    """GET the first page of the collection.

    Follow further pages with `client.append_next_page` or
    `client.fetch_all_pages`.
    """
    client = client or JsonApiClient.shared()
    url = client.url_for(resource_path_of(resource_cls), list_query(filters, sort, include, page_size))
    return await client.send(client.build_request("GET", url), Document.of(resource_cls, client.registry))
