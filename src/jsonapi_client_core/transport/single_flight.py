"""Single-flight transport: at most one in-flight request per fingerprint.

A second request whose fingerprint is already admitted is rejected with
DuplicateInFlightError before it reaches the network; it is not queued or
coalesced onto the first. The fingerprint is released once the response body
has been read or the call has failed, so a fingerprint is never locked out
permanently.

```python
from jsonapi_client_core.transport.single_flight import SingleFlightTransport
import httpx

transport = SingleFlightTransport(wrapped_transport=httpx.AsyncHTTPTransport())

async with httpx.AsyncClient(transport=transport, timeout=10.0) as client:
    response = await client.get("https://api.example.com/articles")
```
"""

import logging
import time
from threading import Lock

import httpx

from jsonapi_client_core.errors.exceptions import DuplicateInFlightError
from jsonapi_client_core.transport.fingerprint import request_fingerprint

logger = logging.getLogger(__name__)


class InFlightRequests:
    """Thread-safe `fingerprint -> start time` table.

    Admission checks and inserts under one lock, so two identical requests
    can never both be admitted.
    """

    def __init__(self) -> None:
        self._started: dict[str, float] = {}
        self._lock = Lock()

    def admit(self, fingerprint: str) -> None:
        """Reserve `fingerprint`.

        Raises:
            DuplicateInFlightError: If it is already reserved.
        """
        with self._lock:
            if fingerprint in self._started:
                logger.debug(f"Duplicate request rejected: {fingerprint}")
                raise DuplicateInFlightError(fingerprint)
            self._started[fingerprint] = time.monotonic()

    def release(self, fingerprint: str) -> None:
        with self._lock:
            self._started.pop(fingerprint, None)

    def clear(self) -> None:
        with self._lock:
            self._started.clear()

    def started_at(self, fingerprint: str) -> float | None:
        with self._lock:
            return self._started.get(fingerprint)

    def __contains__(self, fingerprint: object) -> bool:
        with self._lock:
            return fingerprint in self._started

    def __len__(self) -> int:
        with self._lock:
            return len(self._started)


class SingleFlightTransport(httpx.AsyncBaseTransport):
    """Transport wrapper enforcing one in-flight request per fingerprint.

    Args:
        wrapped_transport: The underlying transport to wrap
        in_flight: Shared admission table (a fresh one by default)
    """

    def __init__(
        self,
        *,
        wrapped_transport: httpx.AsyncBaseTransport,
        in_flight: InFlightRequests | None = None,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.in_flight = in_flight if in_flight is not None else InFlightRequests()

    async def __aenter__(self):
        """Enter async context, delegating to wrapped transport."""
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, delegating to wrapped transport."""
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Admit, dispatch and fully read the response, then release the fingerprint.

        Args:
            request: The HTTP request to send

        Returns:
            HTTP response with its body already read

        Raises:
            DuplicateInFlightError: If an identical request is in flight.
        """
        fingerprint = request_fingerprint(request)
        self.in_flight.admit(fingerprint)
        try:
            response = await self._wrapped_transport.handle_async_request(request)
            await response.aread()
            return response
        finally:
            self.in_flight.release(fingerprint)
