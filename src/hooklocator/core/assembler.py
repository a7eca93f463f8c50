"""Merging per-file matches into one keyed collection."""

from __future__ import annotations

from typing import Iterable

from hooklocator.models.match import MatchRecord


def aggregate(
    per_file_matches: Iterable[Iterable[MatchRecord]],
    into: dict[str, MatchRecord] | None = None,
) -> dict[str, MatchRecord]:
    """Collect records keyed by identity, keeping the first of any duplicates.

    Pass *into* to keep merging into an existing collection.
    """
    collected: dict[str, MatchRecord] = {} if into is None else into
    for matches in per_file_matches:
        for record in matches:
            collected.setdefault(record.key, record)
    return collected
