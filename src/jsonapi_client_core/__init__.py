"""JSON:API Client Core - async client library for JSON:API services.

This library provides:
- Decoding of JSON:API documents into typed resources, with included
  resources resolved into relationships
- Typed filter, sort and include query tokens
- An httpx-based client that rejects overlapping identical requests
- Error taxonomy mapping error documents and transport failures
- Pagination by following `next` links

Example:
    ```python
    from jsonapi_client_core import JsonApiClient, Resource, list_resources
    from jsonapi_client_core.config import load_delegate


    class Article(Resource):
        type_name = "articles"
        resource_path = "articles"


    Article.register()
    client = JsonApiClient.configure(load_delegate())

    document = await list_resources(Article, include=["author"])
    document = await client.fetch_all_pages(document)
    ```
"""

from jsonapi_client_core.client import JsonApiClient
from jsonapi_client_core.document import Document, EmptyResponse, Relationship, Resource, default_registry
from jsonapi_client_core.resources import get_resource, list_resources

__version__ = "0.1.0"

__all__ = [
    "Document",
    "EmptyResponse",
    "JsonApiClient",
    "Relationship",
    "Resource",
    "__version__",
    "default_registry",
    "get_resource",
    "list_resources",
]
