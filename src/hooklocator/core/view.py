"""Sorting and pagination of match collections."""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Iterable, Mapping

from hooklocator.models.match import MatchRecord
from hooklocator.models.result_page import ResultPage

PAGE_SIZE = 25
SORT_KEYS = ("file", "line", "kind")
SORT_DIRS = ("asc", "desc")


def _compare(a: MatchRecord, b: MatchRecord, sort_key: str) -> int:
    match sort_key:
        case "line":
            return a.line - b.line
        case "kind":
            left, right = a.kind, b.kind
        case _:
            left, right = str(a.file), str(b.file)
    return (left > right) - (left < right)


def sort_records(
    records: Iterable[MatchRecord],
    sort_key: str = "file",
    sort_dir: str = "asc",
) -> list[MatchRecord]:
    """Sort records; unknown keys fall back to file and unknown directions to asc."""
    if sort_key not in SORT_KEYS:
        sort_key = "file"
    sign = -1 if sort_dir == "desc" else 1
    return sorted(records, key=cmp_to_key(lambda a, b: sign * _compare(a, b, sort_key)))


def sort_and_page(
    records: Mapping[str, MatchRecord] | Iterable[MatchRecord],
    sort_key: str = "file",
    sort_dir: str = "asc",
    page_number: int = 1,
    per_page: int = PAGE_SIZE,
) -> ResultPage:
    """Produce one page of sorted records.

    Page numbers are 1-based; pages outside the range are empty, not errors.
    """
    if isinstance(records, Mapping):
        records = records.values()
    if sort_key not in SORT_KEYS:
        sort_key = "file"
    if sort_dir not in SORT_DIRS:
        sort_dir = "asc"

    ordered = sort_records(records, sort_key, sort_dir)
    total = len(ordered)
    start = (page_number - 1) * per_page
    items = ordered[start:start + per_page] if page_number >= 1 else []

    return ResultPage(
        items=items,
        page=page_number,
        per_page=per_page,
        total_items=total,
        total_pages=math.ceil(total / per_page),
        sort_key=sort_key,
        sort_dir=sort_dir,
    )
