"""Stable request identity used to detect concurrent duplicates."""

import hashlib

import httpx


def body_digest(content: bytes) -> str:
    return hashlib.md5(content, usedforsecurity=False).hexdigest()


def request_fingerprint(request: httpx.Request) -> str:
    """Absolute URL, followed by the MD5 hex digest of the body when there is one."""
    url = str(request.url)
    content = request.content
    if not content:
        return url
    return url + body_digest(content)
