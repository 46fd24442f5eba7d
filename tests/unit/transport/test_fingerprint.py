"""Tests for request fingerprinting."""

import hashlib

import httpx
import pytest

from jsonapi_client_core.transport import request_fingerprint

URL = "https://api.example.com/articles?sort=title"


@pytest.mark.unit
class TestRequestFingerprint:
    def test_without_body_is_the_url(self):
        assert request_fingerprint(httpx.Request("GET", URL)) == URL

    def test_with_body_appends_md5(self):
        request = httpx.Request("POST", URL, content=b'{"a":1}')

        assert request_fingerprint(request) == URL + hashlib.md5(b'{"a":1}').hexdigest()

    def test_bodies_distinguish_requests(self):
        first = httpx.Request("POST", URL, content=b'{"a":1}')
        second = httpx.Request("POST", URL, content=b'{"a":2}')

        assert request_fingerprint(first) != request_fingerprint(second)

    def test_method_is_not_part_of_identity(self):
        assert request_fingerprint(httpx.Request("GET", URL)) == request_fingerprint(httpx.Request("DELETE", URL))

    def test_empty_body_counts_as_no_body(self):
        assert request_fingerprint(httpx.Request("POST", URL, content=b"")) == URL

    def test_query_distinguishes_requests(self):
        first = httpx.Request("GET", "https://api.example.com/articles?page=1")
        second = httpx.Request("GET", "https://api.example.com/articles?page=2")

        assert request_fingerprint(first) != request_fingerprint(second)
