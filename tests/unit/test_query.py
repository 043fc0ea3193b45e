"""Unit tests for query-string composition."""

from datetime import date, datetime, timedelta, timezone

import pytest

from http_base_client.config import ArrayFormat
from http_base_client.query import (
    append_query_string,
    join_url,
    serialize_date,
    stringify,
)


def iso(value):
    return serialize_date(value)


class TestStringifyArrayFormats:
    @pytest.mark.parametrize(
        ("array_format", "expected"),
        [
            (ArrayFormat.INDICES, "ids[0]=1&ids[1]=2"),
            (ArrayFormat.BRACKETS, "ids[]=1&ids[]=2"),
            (ArrayFormat.REPEAT, "ids=1&ids=2"),
            (ArrayFormat.COMMA, "ids=1,2"),
        ],
    )
    def test_sequence_encoding(self, array_format, expected):
        assert stringify({"ids": [1, 2]}, array_format) == expected

    def test_default_is_brackets(self):
        assert stringify({"ids": (1, 2)}) == "ids[]=1&ids[]=2"

    def test_empty_sequence_omitted(self):
        assert stringify({"ids": [], "q": "x"}) == "q=x"
        assert stringify({"ids": []}, ArrayFormat.COMMA) == ""


class TestStringifyValues:
    def test_nested_mapping(self):
        assert stringify({"filter": {"status": "open", "owner": {"id": 7}}}) == (
            "filter[status]=open&filter[owner][id]=7"
        )

    def test_objects_inside_arrays_with_indices(self):
        query = {"items": [{"id": 1}, {"id": 2}]}
        assert stringify(query, ArrayFormat.INDICES) == "items[0][id]=1&items[1][id]=2"

    def test_booleans_and_none(self):
        assert stringify({"active": True, "deleted": False, "owner": None}) == (
            "active=true&deleted=false&owner="
        )

    def test_values_percent_encoded(self):
        assert stringify({"q": "hello world&more", "path": "a/b"}) == (
            "q=hello%20world%26more&path=a%2Fb"
        )

    def test_keys_keep_brackets_but_encode_other_characters(self):
        assert stringify({"a b": [1]}) == "a%20b[]=1"

    def test_custom_date_serializer(self):
        query = {"day": date(2024, 3, 5)}
        assert stringify(query, date_serializer=lambda d: d.strftime("%d/%m/%Y")) == (
            "day=05%2F03%2F2024"
        )


class TestSerializeDate:
    def test_utc_datetime_uses_z_suffix(self):
        assert iso(datetime(2024, 1, 1, tzinfo=timezone.utc)) == "2024-01-01T00:00:00.000Z"

    def test_aware_datetime_converted_to_utc(self):
        value = datetime(2024, 1, 1, 2, 30, tzinfo=timezone(timedelta(hours=2)))
        assert iso(value) == "2024-01-01T00:30:00.000Z"

    def test_naive_datetime_kept_local(self):
        assert iso(datetime(2024, 1, 1, 12, 0, 0, 123456)) == "2024-01-01T12:00:00.123"

    def test_plain_date(self):
        assert iso(date(2024, 1, 1)) == "2024-01-01"


class TestAppendQueryString:
    QUERY = {"ids": [1, 2], "when": datetime(2024, 1, 1, tzinfo=timezone.utc)}
    ENCODED = "ids[]=1&ids[]=2&when=2024-01-01T00:00:00.000Z"

    def test_appends_with_question_mark(self):
        assert append_query_string("/search", self.QUERY) == f"/search?{self.ENCODED}"

    def test_appends_with_ampersand_when_query_present(self):
        assert append_query_string("/search?x=1", self.QUERY) == f"/search?x=1&{self.ENCODED}"

    def test_no_separator_after_trailing_question_mark(self):
        assert append_query_string("/search?", self.QUERY) == f"/search?{self.ENCODED}"

    @pytest.mark.parametrize("query", [None, {}])
    def test_empty_query_leaves_path_untouched(self, query):
        assert append_query_string("/search", query) == "/search"

    def test_array_format_and_serializer_forwarded(self):
        result = append_query_string(
            "/s",
            {"ids": [1, 2], "d": date(2024, 1, 1)},
            ArrayFormat.REPEAT,
            lambda d: "DAY",
        )
        assert result == "/s?ids=1&ids=2&d=DAY"


class TestJoinUrl:
    @pytest.mark.parametrize(
        ("base", "path"),
        [
            ("https://api.example.com/v1", "users"),
            ("https://api.example.com/v1/", "/users"),
            ("https://api.example.com/v1///", "///users"),
        ],
    )
    def test_slashes_normalised(self, base, path):
        assert join_url(base, path) == "https://api.example.com/v1/users"
