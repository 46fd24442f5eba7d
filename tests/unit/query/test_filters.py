"""Tests for typed filter tokens."""

from datetime import UTC, datetime

import pytest
from conftest import ArticleFilter

from jsonapi_client_core.query import FilterItem, RestFilterItem, filter_queries, joint_label, merged_key_values

START = datetime(2021, 1, 1, tzinfo=UTC)
END = datetime(2021, 1, 31, 23, 59, 59, tzinfo=UTC)


class DeviceFilter(RestFilterItem):
    @classmethod
    def owner(cls, owner_id):
        return cls("owner", owner_id)

    @classmethod
    def window(cls, since, until):
        return cls("window", since=since, until=until)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("case", "field_name", "expected"),
    [("date", "start_from", "dateStartFrom"), ("date", "end_on", "dateEndOn"), ("range", "min", "rangeMin")],
)
def test_joint_label(case, field_name, expected):
    assert joint_label(case, field_name) == expected


@pytest.mark.unit
class TestFilterItem:
    def test_single_value_uses_override(self):
        assert ArticleFilter.search("bikeshed").queries() == [("filter[search.keyword]", "bikeshed")]

    def test_multi_field_case(self):
        assert ArticleFilter.date(START, END).queries() == [
            ("filter[startDate]", "2021-01-01T00:00:00.000Z"),
            ("filter[dateEndOn]", "2021-01-31T23:59:59.000Z"),
        ]

    def test_single_named_field_is_keyed_by_case(self):
        item = FilterItem("status", value="open")

        assert item.key_values() == [("status", "open")]

    def test_list_values_are_comma_joined(self):
        assert ArticleFilter.tags(["a", "b", "c"]).queries() == [("filter[tags]", "a,b,c")]

    def test_value_or_fields_required(self):
        with pytest.raises(TypeError):
            FilterItem("status")
        with pytest.raises(TypeError):
            FilterItem("status", "open", extra=1)

    def test_equality(self):
        assert ArticleFilter.search("x") == ArticleFilter.search("x")
        assert ArticleFilter.search("x") != ArticleFilter.search("y")
        assert ArticleFilter.search("x") != FilterItem("search", "x")
        assert len({ArticleFilter.search("x"), ArticleFilter.search("x")}) == 1

    def test_repr(self):
        assert repr(ArticleFilter.search("x")) == "ArticleFilter('search', 'x')"
        assert repr(DeviceFilter.window(1, 2)) == "DeviceFilter('window', since=1, until=2)"


@pytest.mark.unit
class TestRestFilterItem:
    def test_keys_are_bare(self):
        assert DeviceFilter.owner("me").queries() == [("owner", "me")]
        assert DeviceFilter.window(1, 2).queries() == [("windowSince", "1"), ("windowUntil", "2")]


@pytest.mark.unit
class TestFilterCollections:
    def test_filter_queries_in_order(self):
        items = [ArticleFilter.search("x"), ArticleFilter.tags(["t"])]

        assert filter_queries(items) == [("filter[search.keyword]", "x"), ("filter[tags]", "t")]

    def test_filter_queries_none(self):
        assert filter_queries(None) == []

    def test_merged_key_values_last_wins(self):
        items = [DeviceFilter.owner("a"), DeviceFilter.window(1, 2), DeviceFilter.owner("b")]

        assert merged_key_values(items) == {"owner": "b", "windowSince": 1, "windowUntil": 2}

    def test_merged_key_values_keep_raw_values(self):
        assert merged_key_values([DeviceFilter.window(START, END)]) == {"windowSince": START, "windowUntil": END}
