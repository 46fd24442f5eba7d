"""Transport layer components.

This module provides request construction helpers and the single-flight
transport that wraps httpx's AsyncHTTPTransport to reject concurrent
duplicate requests.

Modules:
    fingerprint: Request identity (URL plus body digest)
    requests: URL resolution, default headers and body encodings
    single_flight: In-flight admission table and transport wrapper

Example:
    ```python
    from jsonapi_client_core.transport import SingleFlightTransport

    transport = SingleFlightTransport(wrapped_transport=httpx.AsyncHTTPTransport())
    ```
"""

from jsonapi_client_core.transport.fingerprint import request_fingerprint
from jsonapi_client_core.transport.requests import (
    ContentType,
    default_headers,
    encode_json,
    form_body,
    json_body,
    url_from_path,
)
from jsonapi_client_core.transport.single_flight import InFlightRequests, SingleFlightTransport

__all__ = [
    "ContentType",
    "InFlightRequests",
    "SingleFlightTransport",
    "default_headers",
    "encode_json",
    "form_body",
    "json_body",
    "request_fingerprint",
    "url_from_path",
]
