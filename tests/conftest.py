"""Pytest configuration and shared fixtures for jsonapi-client-core tests."""

from dataclasses import dataclass

import pytest

from jsonapi_client_core.client import JsonApiClient
from jsonapi_client_core.document import Relationship, Resource, ResourceRegistry
from jsonapi_client_core.query import FilterItem, IncludeField, SortField


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing settings resolution.
    """
    import os

    test_prefixes = ("TEST_", "JSONAPI_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture(autouse=True)
def reset_shared_client():
    JsonApiClient.reset_shared()
    yield
    JsonApiClient.reset_shared()


class ArticleFilter(FilterItem):
    key_overrides = {"search": "search.keyword", "dateStartFrom": "startDate"}

    @classmethod
    def search(cls, keyword):
        return cls("search", keyword)

    @classmethod
    def date(cls, start_from, end_on):
        return cls("date", start_from=start_from, end_on=end_on)

    @classmethod
    def tags(cls, values):
        return cls("tags", values)


class ArticleSort(SortField):
    CREATED = "createdAt"
    TITLE = "title"


class ArticleInclude(IncludeField):
    AUTHOR = "author"
    COMMENTS = "comments"


class Article(Resource):
    type_name = "articles"
    resource_path = "articles"
    filter_type = ArticleFilter
    sort_type = ArticleSort
    include_type = ArticleInclude

    @dataclass(frozen=True)
    class Attributes:
        title: str
        word_count: int | None = None

    @dataclass(frozen=True)
    class Relationships:
        author: Relationship | None = None
        comments: Relationship | None = None


class Person(Resource):
    type_name = "people"

    @dataclass(frozen=True)
    class Attributes:
        name: str

    @dataclass(frozen=True)
    class Relationships:
        best_friend: Relationship | None = None


class Comment(Resource):
    type_name = "comments"


@pytest.fixture
def registry():
    """A registry holding the test resource types, isolated from the default one."""
    registry = ResourceRegistry()
    for resource_cls in (Article, Person, Comment):
        resource_cls.register(registry=registry)
    return registry


def article_payload(article_id="1", title="JSON:API paints my bikeshed!", author_id="9"):
    return {
        "type": "articles",
        "id": article_id,
        "attributes": {"title": title, "wordCount": 120},
        "relationships": {
            "author": {
                "data": {"type": "people", "id": author_id},
                "links": {"related": f"/articles/{article_id}/author"},
            }
        },
        "links": {"self": f"https://api.example.com/articles/{article_id}"},
    }


def person_payload(person_id="9", name="Dan"):
    return {"type": "people", "id": person_id, "attributes": {"name": name}}
