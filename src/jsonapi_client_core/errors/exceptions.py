"""Structured exceptions for JSON:API client failures."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from jsonapi_client_core.errors.models import DomainError


class JsonApiClientError(Exception):
    """Base exception for every failure raised by this library."""

    pass


class LocalError(JsonApiClientError):
    """Misuse detected on the client side (missing configuration, bad input)."""

    pass


class UnknownResourceTypeError(LocalError):
    """Raised when a wire `type` has no registered decoder."""

    def __init__(self, type_name: str):
        super().__init__(
            f"Unknown resource type: {type_name!r}. "
            f"Register it with `MyResource.register({type_name!r})` before decoding"
        )
        self.type_name = type_name


class AuthExpiredError(JsonApiClientError):
    """Access token is expired; the request never reached the network."""

    pass


class DuplicateInFlightError(JsonApiClientError):
    """An identical request is already in progress."""

    def __init__(self, fingerprint: str):
        super().__init__("The same request is in progress.")
        self.fingerprint = fingerprint


class TransportError(JsonApiClientError):
    """Network-layer failure (connectivity, timeout)."""

    pass


class APIError(JsonApiClientError):
    """Base exception for failures tied to an HTTP response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ServerDomainError(APIError):
    """Error response carrying a decoded JSON:API error list."""

    def __init__(self, message: str, errors: "list[DomainError] | None" = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors if errors is not None else []


class ServerOpaqueError(APIError):
    """Error response whose body is not a structured error document."""

    pass


class DecodeFailureError(APIError):
    """Success response whose body could not be decoded as the expected type."""

    pass
