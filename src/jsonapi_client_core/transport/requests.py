"""Request construction helpers: URLs, default headers and body encodings."""

import json
import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

from jsonapi_client_core.errors.exceptions import LocalError
from jsonapi_client_core.query.values import json_value, query_value

if TYPE_CHECKING:
    from jsonapi_client_core.config.delegate import ServiceDelegate

logger = logging.getLogger(__name__)


class ContentType(str, Enum):
    FORM_URLENCODED = "application/x-www-form-urlencoded"
    JSON = "application/json;charset=UTF-8"
    JSON_API = "application/vnd.api+json"


BODY_METHODS = frozenset(["POST", "PUT"])


def default_headers(delegate: "ServiceDelegate", authorization: str | None = None) -> dict[str, str]:
    """Headers sent with every request; the delegate's additional headers win on collision.

    Args:
        delegate: Supplies the access token and additional headers.
        authorization: Full `Authorization` value replacing the bearer token.
    """
    headers: dict[str, str] = {}
    if authorization is not None:
        headers["Authorization"] = authorization
    elif delegate.access_token:
        headers["Authorization"] = f"Bearer {delegate.access_token}"
    headers["Accept"] = "application/json"
    headers["Accept-Encoding"] = "gzip, deflate, br"
    headers["Cache-Control"] = "no-cache"

    headers.update(delegate.additional_headers or {})
    return headers


def url_from_path(endpoint: str | httpx.URL, path: str, params: Sequence[tuple[str, str]] | None = None) -> httpx.URL:
    """Resolve `path` against the API endpoint and append `params` in order.

    Absolute URLs in `path` are kept as they are.
    """
    url = httpx.URL(endpoint).join(path)
    if params:
        url = url.copy_merge_params(list(params))
    return url


def form_body(params: Sequence[tuple[str, Any]]) -> bytes:
    """`application/x-www-form-urlencoded` body for ordered key/value pairs."""
    try:
        return str(httpx.QueryParams([(key, query_value(value)) for key, value in params])).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise LocalError(f"Generate x-www-form-urlencoded data failed: {e}") from e


def encode_json(value: Any) -> bytes:
    """JSON body for a mapping, dataclass or list; dates and enums are rendered as strings."""
    try:
        return json.dumps(json_value(value)).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise LocalError(f"Can not encode your request: {e}") from e


def json_body(key_values: Mapping[str, Any] | None) -> bytes:
    if key_values is None:
        return b""
    return encode_json(dict(key_values))


def masked_headers(headers: httpx.Headers) -> dict[str, str]:
    return {key: "***" if key.lower() == "authorization" else value for key, value in headers.items()}


def log_request(request: httpx.Request) -> None:
    logger.debug(f"{request.method} {request.url} {masked_headers(request.headers)}")
    if request.content:
        logger.debug(request.content.decode("utf-8", errors="replace"))
