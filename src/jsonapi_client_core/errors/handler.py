"""Error handling utilities for HTTP responses."""

import logging
from typing import TYPE_CHECKING

import httpx

from jsonapi_client_core.errors.exceptions import APIError, ServerDomainError, ServerOpaqueError
from jsonapi_client_core.errors.models import ErrorDocument

if TYPE_CHECKING:
    from jsonapi_client_core.config.delegate import ServiceDelegate

logger = logging.getLogger(__name__)


def notify_auth_failure(status_code: int, delegate: "ServiceDelegate | None") -> None:
    """Tell the delegate about a 401 or 403 response.

    Best effort: a failing callback is logged and never changes the error
    surfaced to the caller.
    """
    if delegate is None:
        return

    if status_code == 401:
        callback = delegate.did_receive_unauthorized_error
    elif status_code == 403:
        callback = delegate.did_receive_forbidden_error
    else:
        return

    try:
        callback()
    except Exception as e:
        logger.warning(f"Delegate notification for HTTP {status_code} failed: {e}")


def domain_error_from_response(
    response: httpx.Response, delegate: "ServiceDelegate | None" = None
) -> ServerDomainError | None:
    """Decode the body with the delegate's error document type (JSON:API `errors` by default).

    Returns:
        ServerDomainError, or None when the body is not an error document
    """
    document_type = getattr(delegate, "error_document_type", None) or ErrorDocument
    document = document_type.from_response(response)
    if document is None:
        return None

    logger.error(f"API error {response.status_code}: {document.errors}")
    return ServerDomainError(
        message=document.to_exception_message(),
        errors=list(document.errors),
        status_code=response.status_code,
        response=response,
    )


def error_from_response(response: httpx.Response, delegate: "ServiceDelegate | None" = None) -> APIError:
    """Build the exception describing an error response.

    Bodies that do not decode as an error document produce a
    ServerOpaqueError carrying the raw status code.

    Args:
        response: HTTP response object
        delegate: Configuration delegate to notify on 401/403

    Returns:
        ServerDomainError or ServerOpaqueError
    """
    status_code = response.status_code
    notify_auth_failure(status_code, delegate)

    domain_error = domain_error_from_response(response, delegate)
    if domain_error is not None:
        return domain_error

    response_text = response.text[:200]
    logger.error(f"Undecodable API error {status_code}: {response_text}")
    return ServerOpaqueError(
        message=f"HTTP {status_code}: Unable to decode data response from server!",
        status_code=status_code,
        response=response,
    )


def raise_for_status(response: httpx.Response, delegate: "ServiceDelegate | None" = None) -> None:
    """Raise the appropriate exception for an HTTP error response.

    Args:
        response: HTTP response object
        delegate: Configuration delegate to notify on 401/403

    Raises:
        ServerDomainError or ServerOpaqueError for non-2xx responses
    """
    if response.is_success:
        return

    raise error_from_response(response, delegate)
