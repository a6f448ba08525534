"""
List query semantics shared by every backend.

Filters:
    {"field": value}                    exact match
    {"field": {"$contains": "doe"}}     case-insensitive substring
    {"field": {"$in": [a, b]}}          membership
    {"$or": [{...}, {...}]}             any group matches (AND within a group)

Sort strings are "field" (ascending) or "-field" (descending). Missing and
None values always sort last. Limit is applied after sorting.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from courtside.services.data_client import ListOptions, ListQuery

CONTAINS = "$contains"
IN = "$in"
OR = "$or"


def normalize_options(options: ListQuery) -> ListOptions:
    """Accept None, a sort string, a ListOptions or a dict with filters/sort/limit"""
    if options is None:
        return ListOptions()
    if isinstance(options, str):
        return ListOptions(sort=options or None)
    if isinstance(options, ListOptions):
        return options
    return ListOptions(
        filters=options.get("filters"),
        sort=options.get("sort"),
        limit=options.get("limit"),
    )


def parse_sort(sort: Optional[str]) -> Optional[Tuple[str, bool]]:
    """'-created_at' -> ('created_at', True); returns None for no sort"""
    if not sort:
        return None
    descending = sort.startswith("-")
    return sort.lstrip("+-"), descending


def _matches_value(record: Mapping[str, Any], key: str, expected: Any) -> bool:
    actual = record.get(key)

    if isinstance(expected, Mapping):
        if CONTAINS in expected:
            needle = str(expected[CONTAINS]).lower()
            return needle in str(actual if actual is not None else "").lower()
        if IN in expected:
            candidates = expected[IN]
            if not isinstance(candidates, (list, tuple, set)):
                return True
            return actual in candidates

    return actual == expected


def matches_condition(record: Mapping[str, Any], condition: Mapping[str, Any]) -> bool:
    return all(_matches_value(record, key, value) for key, value in condition.items())


def apply_filters(records: Iterable[Mapping[str, Any]], filters: Optional[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    records = list(records)
    if not filters:
        return records

    def keep(record):
        for key, value in filters.items():
            if key == OR and isinstance(value, list):
                if not any(matches_condition(record, group) for group in value):
                    return False
            elif not _matches_value(record, key, value):
                return False
        return True

    return [record for record in records if keep(record)]


def sort_key(value: Any) -> Tuple[int, Any]:
    """
    Orderable key for a stored value. Numbers and datetimes compare by value
    (naive datetimes as UTC); other types sort after them, grouped by type.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (0, value.timestamp())
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, str(value))


def apply_sort(records: Iterable[Mapping[str, Any]], sort: Optional[str]) -> List[Mapping[str, Any]]:
    records = list(records)
    parsed = parse_sort(sort)
    if parsed is None:
        return records

    key, descending = parsed
    present = [record for record in records if record.get(key) is not None]
    missing = [record for record in records if record.get(key) is None]
    present.sort(key=lambda record: sort_key(record[key]), reverse=descending)
    return present + missing


def apply_limit(records: List[Mapping[str, Any]], limit: Optional[int]) -> List[Mapping[str, Any]]:
    if limit:
        return records[:limit]
    return records


def run_query(records: Iterable[Dict[str, Any]], options: ListQuery) -> List[Dict[str, Any]]:
    """Filter, sort, then limit"""
    normalized = normalize_options(options)
    result = apply_filters(records, normalized.filters)
    result = apply_sort(result, normalized.sort)
    return apply_limit(result, normalized.limit)
