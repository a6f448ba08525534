"""
Tests for the shared filter/sort/limit semantics.
"""

from datetime import datetime, timezone

from courtside.services.data_client import ListOptions
from courtside.services.query import apply_filters, apply_sort, normalize_options, parse_sort, run_query

RECORDS = [
    {"id": "a", "display_name": "Carlos Alcaraz", "current_rank": 3, "nationality": "ESP"},
    {"id": "b", "display_name": "Jannik Sinner", "current_rank": None, "nationality": "ITA"},
    {"id": "c", "display_name": "Novak Djokovic", "current_rank": 1, "nationality": "SRB"},
    {"id": "d", "display_name": "Rafael Nadal", "nationality": "ESP"},
]


def ids(records):
    return [record["id"] for record in records]


class TestOptions:

    def test_normalize(self):
        assert normalize_options(None) == ListOptions()
        assert normalize_options("-created_at") == ListOptions(sort="-created_at")
        assert normalize_options({"filters": {"a": 1}, "limit": 5}) == ListOptions(filters={"a": 1}, limit=5)

    def test_parse_sort(self):
        assert parse_sort(None) is None
        assert parse_sort("") is None
        assert parse_sort("current_rank") == ("current_rank", False)
        assert parse_sort("-current_rank") == ("current_rank", True)


class TestFilters:

    def test_equality(self):
        assert ids(apply_filters(RECORDS, {"nationality": "ESP"})) == ["a", "d"]

    def test_contains_is_case_insensitive(self):
        assert ids(apply_filters(RECORDS, {"display_name": {"$contains": "NAD"}})) == ["d"]

    def test_contains_on_missing_field(self):
        assert apply_filters(RECORDS, {"slug": {"$contains": "x"}}) == []

    def test_in(self):
        assert ids(apply_filters(RECORDS, {"id": {"$in": ["a", "c", "z"]}})) == ["a", "c"]

    def test_or_groups(self):
        filters = {"$or": [{"nationality": "SRB"}, {"display_name": {"$contains": "sinner"}}]}
        assert ids(apply_filters(RECORDS, filters)) == ["b", "c"]

    def test_or_combined_with_field(self):
        filters = {"nationality": "ESP", "$or": [{"current_rank": 3}, {"id": "c"}]}
        assert ids(apply_filters(RECORDS, filters)) == ["a"]


class TestSortAndLimit:

    def test_nulls_last_ascending(self):
        assert ids(apply_sort(RECORDS, "current_rank")) == ["c", "a", "b", "d"]

    def test_nulls_last_descending(self):
        assert ids(apply_sort(RECORDS, "-current_rank")) == ["a", "c", "b", "d"]

    def test_no_sort_keeps_order(self):
        assert ids(apply_sort(RECORDS, None)) == ["a", "b", "c", "d"]

    def test_limit_after_sort(self):
        result = run_query(RECORDS, ListOptions(filters={"nationality": {"$in": ["ESP", "SRB"]}}, sort="current_rank", limit=2))
        assert ids(result) == ["c", "a"]

    def test_naive_and_aware_datetimes_sort_together(self):
        records = [
            {"id": "naive", "utc_start": datetime(2026, 11, 1, 10, 0)},
            {"id": "aware", "utc_start": datetime(2026, 10, 1, 10, 0, tzinfo=timezone.utc)},
            {"id": "none", "utc_start": None},
        ]
        assert ids(apply_sort(records, "utc_start")) == ["aware", "naive", "none"]
        assert ids(apply_sort(records, "-utc_start")) == ["naive", "aware", "none"]

    def test_mixed_value_types_do_not_raise(self):
        records = [{"id": "a", "value": "b"}, {"id": "b", "value": 2}, {"id": "c", "value": 1.5}]
        assert ids(apply_sort(records, "value")) == ["c", "b", "a"]
