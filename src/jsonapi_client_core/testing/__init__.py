"""Testing utilities for code built on the JSON:API client.

Example:
    ```python
    from jsonapi_client_core.testing import create_mock_client, json_api_response


    async def test_lists_articles():
        def handler(request):
            return json_api_response({"data": []})

        async with create_mock_client(handler) as client:
            document = await list_resources(Article, client=client)
    ```
"""

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from jsonapi_client_core.client import JsonApiClient
from jsonapi_client_core.config.delegate import PaginationParams
from jsonapi_client_core.errors.models import ErrorDocument


@dataclass
class MockDelegate:
    """ServiceDelegate recording the 401/403 callbacks it receives."""

    api_endpoint: str = "https://api.example.com/"
    access_token: str | None = "test-token"
    is_token_expired: bool = False
    pagination_params: PaginationParams | None = None
    additional_headers: Mapping[str, str] | None = None
    error_document_type: Any = ErrorDocument
    unauthorized_calls: int = field(default=0, init=False)
    forbidden_calls: int = field(default=0, init=False)

    def did_receive_unauthorized_error(self) -> None:
        self.unauthorized_calls += 1

    def did_receive_forbidden_error(self) -> None:
        self.forbidden_calls += 1


def create_mock_client(
    handler: Callable[[httpx.Request], Any],
    delegate: Any = None,
    **kwargs: Any,
) -> JsonApiClient:
    """A client whose requests are answered by `handler` (sync or async) instead of the network."""
    return JsonApiClient(delegate or MockDelegate(), transport=httpx.MockTransport(handler), **kwargs)


def json_api_response(payload: Any, status_code: int = 200, **kwargs: Any) -> httpx.Response:
    """A response with a JSON:API body."""
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/vnd.api+json"},
        **kwargs,
    )


def error_response(status_code: int, *errors: Mapping[str, Any]) -> httpx.Response:
    """A response with a JSON:API `errors` body."""
    return json_api_response({"errors": list(errors)}, status_code=status_code)


__all__ = ["MockDelegate", "create_mock_client", "error_response", "json_api_response"]
