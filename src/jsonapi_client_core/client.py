"""The JSON:API client: request dispatch, response decoding and pagination.

```python
from jsonapi_client_core import JsonApiClient, Document
from jsonapi_client_core.config import StaticDelegate

client = JsonApiClient.configure(StaticDelegate(api_endpoint="https://api.example.com/"))

request = client.build_request("GET", client.url_for("articles"))
document = await client.send(request, Document.of(Article))
document = await client.fetch_all_pages(document)
```
"""

import logging
from threading import Lock
from typing import Any, ClassVar, Protocol, TypeVar

import httpx

from jsonapi_client_core.config.delegate import ServiceDelegate
from jsonapi_client_core.document.document import Document
from jsonapi_client_core.document.registry import ResourceRegistry, default_registry
from jsonapi_client_core.errors.exceptions import (
    AuthExpiredError,
    DecodeFailureError,
    LocalError,
    TransportError,
)
from jsonapi_client_core.errors.handler import domain_error_from_response, error_from_response
from jsonapi_client_core.transport.requests import (
    BODY_METHODS,
    ContentType,
    default_headers,
    log_request,
    url_from_path,
)
from jsonapi_client_core.transport.single_flight import InFlightRequests, SingleFlightTransport

logger = logging.getLogger(__name__)

T = TypeVar("T", covariant=True)

DEFAULT_TIMEOUT = 10.0


class Decodable(Protocol[T]):
    """Anything with a `from_json(payload)` constructor: a Document type, a resource class, a response wrapper."""

    def from_json(self, payload: Any) -> T: ...


class JsonApiClient:
    """Sends requests for a configured API and decodes the responses.

    Identical requests (same URL and body) may not overlap: a second one is
    rejected with DuplicateInFlightError while the first is outstanding.

    Args:
        delegate: Endpoint, credentials and callbacks for the API
        transport: Underlying httpx transport (AsyncHTTPTransport by default)
        timeout: Request timeout in seconds
        registry: Resource types used to decode `included` entries
    """

    _shared: ClassVar["JsonApiClient | None"] = None
    _configure_lock: ClassVar[Lock] = Lock()

    def __init__(
        self,
        delegate: ServiceDelegate,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        registry: ResourceRegistry | None = None,
    ) -> None:
        self._delegate = delegate
        self.registry = registry or default_registry
        self.in_flight = InFlightRequests()
        self._http = httpx.AsyncClient(
            transport=SingleFlightTransport(
                wrapped_transport=transport or httpx.AsyncHTTPTransport(),
                in_flight=self.in_flight,
            ),
            timeout=timeout,
            follow_redirects=True,
        )

    # Shared instance

    @classmethod
    def configure(cls, delegate: ServiceDelegate, *, force: bool = False, **kwargs: Any) -> "JsonApiClient":
        """Create the shared client.

        A second call keeps the existing client and logs a warning, unless
        `force` is set, in which case the delegate is replaced.

        Returns:
            The shared client
        """
        with cls._configure_lock:
            if cls._shared is None:
                cls._shared = cls(delegate, **kwargs)
                logger.debug(f"JsonApiClient configured for {delegate.api_endpoint}")
            elif force:
                logger.info("Force overriding existing JsonApiClient configuration!")
                cls._shared._delegate = delegate
            else:
                logger.warning("JsonApiClient is already configured; ignoring duplicate configure()")
            return cls._shared

    @classmethod
    def shared(cls) -> "JsonApiClient":
        """Return the shared client.

        Raises:
            LocalError: If `configure` has not been called.
        """
        if cls._shared is None:
            raise LocalError("JsonApiClient is not configured")
        return cls._shared

    @classmethod
    def reset_shared(cls) -> None:
        with cls._configure_lock:
            cls._shared = None

    @property
    def delegate(self) -> ServiceDelegate:
        return self._delegate

    # Request building

    def url_for(self, path: str, params: list[tuple[str, str]] | None = None) -> httpx.URL:
        return url_from_path(self._delegate.api_endpoint, path, params)

    def build_request(
        self,
        method: str,
        url: str | httpx.URL,
        *,
        content: bytes | None = None,
        content_type: ContentType | str = ContentType.JSON,
        authorization: str | None = None,
    ) -> httpx.Request:
        """Build a request carrying the default headers.

        POST and PUT requests also get a `Content-Type` header.

        Args:
            method: HTTP method
            url: Absolute URL (see `url_for`)
            content: Encoded request body
            content_type: Body media type for POST and PUT
            authorization: Replaces the bearer token header when given
        """
        method = method.upper()
        headers = default_headers(self._delegate, authorization)
        if method in BODY_METHODS:
            headers["Content-Type"] = ContentType(content_type).value
        return self._http.build_request(method, url, headers=headers, content=content or None)

    # Execution

    async def _dispatch(self, request: httpx.Request) -> httpx.Response:
        if self._delegate.is_token_expired:
            logger.warning(f"Access token expired, not sending {request.method} {request.url}")
            raise AuthExpiredError("Access token is expired.")

        log_request(request)
        try:
            response = await self._http.send(request)
        except httpx.TransportError as e:
            logger.error(f"{request.method} {request.url} failed: {e!r}")
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        return response

    async def send(self, request: httpx.Request, into: Decodable[T]) -> T:
        """Send `request` and decode a successful response with `into.from_json`.

        Args:
            request: Request built by `build_request`
            into: Decode target, e.g. `Document.of(Article)` or `EmptyResponse`

        Returns:
            The decoded response

        Raises:
            AuthExpiredError: The delegate reports an expired token; nothing is sent.
            DuplicateInFlightError: An identical request is still in flight.
            TransportError: The request did not produce a response.
            ServerDomainError: The server answered with a JSON:API error document.
            ServerOpaqueError: The server answered non-2xx with an undecodable body.
            DecodeFailureError: A 2xx body did not decode as `into`.
        """
        response = await self._dispatch(request)
        if not response.is_success:
            raise error_from_response(response, self._delegate)
        return self._decode(response, into)

    def _decode(self, response: httpx.Response, into: Decodable[T]) -> T:
        if not response.content and getattr(into, "empty_body", False):
            return into()  # type: ignore[operator]

        try:
            return into.from_json(response.json())
        except (ValueError, KeyError, TypeError) as e:
            logger.debug(f"Decoding HTTP {response.status_code} body as {into!r} failed: {e}")
            domain_error = domain_error_from_response(response, self._delegate)
            if domain_error is not None:
                raise domain_error from e
            raise DecodeFailureError(
                message=f"HTTP {response.status_code}: Unable to decode data response from server!",
                status_code=response.status_code,
                response=response,
            ) from e

    async def send_ok(self, request: httpx.Request) -> bool:
        """Send `request` and return True on 2xx without decoding the body."""
        response = await self._dispatch(request)
        if not response.is_success:
            raise error_from_response(response, self._delegate)
        return True

    async def request(
        self,
        method: str,
        path: str,
        *,
        into: Decodable[T],
        params: list[tuple[str, str]] | None = None,
        content: bytes | None = None,
        content_type: ContentType | str = ContentType.JSON,
    ) -> T:
        """Build and send a request for a path relative to the API endpoint."""
        request = self.build_request(method, self.url_for(path, params), content=content, content_type=content_type)
        return await self.send(request, into)

    # Pagination

    async def next_page(self, document: Document[Any]) -> Document[Any] | None:
        """Fetch the page after `document`, or None when it has no usable `next` link."""
        url = document.next_page_url
        if url is None:
            return None
        if document.resource_type is None:
            raise LocalError("Document has no resource type to decode the next page with")
        return await self.send(self.build_request("GET", url), Document.of(document.resource_type, self.registry))

    async def append_next_page(self, document: Document[Any]) -> Document[Any]:
        """Return `document` merged with its next page, or `document` itself on the last page."""
        page = await self.next_page(document)
        if page is None:
            return document
        return document.appending(page)

    async def fetch_all_pages(self, document: Document[Any], *, max_pages: int | None = None) -> Document[Any]:
        """Follow `next` links one page at a time, merging every page into one document.

        Args:
            document: The first page
            max_pages: Stop after fetching this many additional pages
        """
        fetched = 0
        while document.has_next_page and (max_pages is None or fetched < max_pages):
            document = await self.append_next_page(document)
            fetched += 1
        logger.debug(f"Fetched {fetched} additional page(s), {len(document.data)} resources")
        return document

    # Lifecycle

    def clean_all_requests(self) -> None:
        """Forget every in-flight fingerprint so identical requests are admitted again."""
        self.in_flight.clear()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "JsonApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
