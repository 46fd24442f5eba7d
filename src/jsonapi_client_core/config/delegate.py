"""Configuration delegate consulted by the client on every request.

The delegate supplies the API endpoint, the access token and its expiry
state, pagination key names, extra headers and the error document type, and
receives 401/403 notifications back from the client.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, ClassVar, Protocol, runtime_checkable

from jsonapi_client_core.errors.models import ErrorDocument


@dataclass(frozen=True)
class PaginationParams:
    """Query parameter names used to request paginated data.

    Attributes:
        index_key: Key for the page, index, cursor or offset.
        size_key: Key for the number of items per page.
    """

    index_key: str
    size_key: str

    OFFSET_LIMIT: ClassVar["PaginationParams"]
    CURSOR_LIMIT: ClassVar["PaginationParams"]
    INDEX_SIZE: ClassVar["PaginationParams"]
    PAGE_SIZE: ClassVar["PaginationParams"]
    DEFAULT: ClassVar["PaginationParams"]


PaginationParams.OFFSET_LIMIT = PaginationParams(index_key="offset", size_key="limit")
PaginationParams.CURSOR_LIMIT = PaginationParams(index_key="cursor", size_key="limit")
PaginationParams.INDEX_SIZE = PaginationParams(index_key="index", size_key="size")
PaginationParams.PAGE_SIZE = PaginationParams(index_key="page", size_key="size")
PaginationParams.DEFAULT = PaginationParams.OFFSET_LIMIT


@runtime_checkable
class ServiceDelegate(Protocol):
    """Runtime configuration interface injected into the client."""

    @property
    def api_endpoint(self) -> str:
        """Base URL that relative resource paths resolve against."""
        ...

    @property
    def access_token(self) -> str | None:
        """Bearer token sent in the `Authorization` header."""
        ...

    @property
    def is_token_expired(self) -> bool:
        """True when requests must fail fast with AuthExpiredError."""
        ...

    @property
    def pagination_params(self) -> PaginationParams | None:
        """Key pair appended to paged REST list requests, or None."""
        ...

    @property
    def additional_headers(self) -> Mapping[str, str] | None:
        """Headers merged over the defaults; keys here win on collision."""
        ...

    @property
    def error_document_type(self) -> Any:
        """Type exposing `from_response(response)` for error bodies."""
        ...

    def did_receive_unauthorized_error(self) -> None: ...

    def did_receive_forbidden_error(self) -> None: ...


@dataclass
class StaticDelegate:
    """Plain-value ServiceDelegate implementation.

    Example:
        ```python
        delegate = StaticDelegate(
            api_endpoint="https://api.example.com/v1/",
            access_token=token,
            on_unauthorized=session.sign_out,
        )
        JsonApiClient.configure(delegate)
        ```
    """

    api_endpoint: str
    access_token: str | None = None
    token_expires_at: datetime | None = None
    pagination_params: PaginationParams | None = None
    additional_headers: Mapping[str, str] | None = None
    error_document_type: Any = ErrorDocument
    on_unauthorized: Callable[[], None] | None = field(default=None, repr=False)
    on_forbidden: Callable[[], None] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        # Naive expiry times are taken as UTC.
        if self.token_expires_at is not None and self.token_expires_at.tzinfo is None:
            self.token_expires_at = self.token_expires_at.replace(tzinfo=UTC)

    @property
    def is_token_expired(self) -> bool:
        if self.token_expires_at is None:
            return False
        return datetime.now(UTC) >= self.token_expires_at

    def did_receive_unauthorized_error(self) -> None:
        if self.on_unauthorized is not None:
            self.on_unauthorized()

    def did_receive_forbidden_error(self) -> None:
        if self.on_forbidden is not None:
            self.on_forbidden()
