"""Error taxonomy and JSON:API error document support."""

from jsonapi_client_core.errors.exceptions import (
    APIError,
    AuthExpiredError,
    DecodeFailureError,
    DuplicateInFlightError,
    JsonApiClientError,
    LocalError,
    ServerDomainError,
    ServerOpaqueError,
    TransportError,
    UnknownResourceTypeError,
)
from jsonapi_client_core.errors.handler import (
    domain_error_from_response,
    error_from_response,
    notify_auth_failure,
    raise_for_status,
)
from jsonapi_client_core.errors.models import DomainError, ErrorDocument

__all__ = [
    "APIError",
    "AuthExpiredError",
    "DecodeFailureError",
    "DomainError",
    "DuplicateInFlightError",
    "ErrorDocument",
    "JsonApiClientError",
    "LocalError",
    "ServerDomainError",
    "ServerOpaqueError",
    "TransportError",
    "UnknownResourceTypeError",
    "domain_error_from_response",
    "error_from_response",
    "notify_auth_failure",
    "raise_for_status",
]
