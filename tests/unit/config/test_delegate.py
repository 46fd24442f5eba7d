"""Tests for the configuration delegate."""

from datetime import UTC, datetime, timedelta

import pytest

from jsonapi_client_core.config import PaginationParams, ServiceDelegate, StaticDelegate
from jsonapi_client_core.errors import ErrorDocument
from jsonapi_client_core.testing import MockDelegate


@pytest.mark.unit
class TestPaginationParams:
    def test_presets(self):
        assert PaginationParams.OFFSET_LIMIT == PaginationParams("offset", "limit")
        assert PaginationParams.CURSOR_LIMIT == PaginationParams("cursor", "limit")
        assert PaginationParams.INDEX_SIZE == PaginationParams("index", "size")
        assert PaginationParams.PAGE_SIZE == PaginationParams("page", "size")

    def test_default_is_offset_limit(self):
        assert PaginationParams.DEFAULT == PaginationParams.OFFSET_LIMIT


@pytest.mark.unit
class TestStaticDelegate:
    def test_defaults(self):
        delegate = StaticDelegate(api_endpoint="https://api.example.com/")

        assert delegate.access_token is None
        assert delegate.is_token_expired is False
        assert delegate.pagination_params is None
        assert delegate.additional_headers is None
        assert delegate.error_document_type is ErrorDocument

    def test_token_expiry(self):
        past = datetime.now(UTC) - timedelta(minutes=1)
        future = datetime.now(UTC) + timedelta(hours=1)

        assert StaticDelegate(api_endpoint="https://a/", token_expires_at=past).is_token_expired is True
        assert StaticDelegate(api_endpoint="https://a/", token_expires_at=future).is_token_expired is False

    def test_naive_expiry_is_utc(self):
        expired = StaticDelegate(api_endpoint="https://a/", token_expires_at=datetime(2000, 1, 1))
        valid = StaticDelegate(api_endpoint="https://a/", token_expires_at=datetime(2999, 1, 1))

        assert expired.token_expires_at == datetime(2000, 1, 1, tzinfo=UTC)
        assert expired.is_token_expired is True
        assert valid.is_token_expired is False

    def test_callbacks(self):
        calls = []
        delegate = StaticDelegate(
            api_endpoint="https://api.example.com/",
            on_unauthorized=lambda: calls.append("401"),
            on_forbidden=lambda: calls.append("403"),
        )

        delegate.did_receive_unauthorized_error()
        delegate.did_receive_forbidden_error()

        assert calls == ["401", "403"]

    def test_callbacks_are_optional(self):
        delegate = StaticDelegate(api_endpoint="https://api.example.com/")

        delegate.did_receive_unauthorized_error()
        delegate.did_receive_forbidden_error()

    def test_callbacks_not_in_repr(self):
        delegate = StaticDelegate(api_endpoint="https://api.example.com/", on_unauthorized=print)

        assert "on_unauthorized" not in repr(delegate)


@pytest.mark.unit
@pytest.mark.parametrize(
    "delegate",
    [StaticDelegate(api_endpoint="https://api.example.com/"), MockDelegate()],
)
def test_implementations_satisfy_protocol(delegate):
    assert isinstance(delegate, ServiceDelegate)
