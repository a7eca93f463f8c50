"""Per-line matching of hook call-sites."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from hooklocator.models.match import MatchRecord

log = logging.getLogger(__name__)

# Order matters for classify_line(): the first substring hit wins.
HOOK_KINDS: tuple[str, ...] = (
    "add_action",
    "add_filter",
    "do_action",
    "apply_filters",
    "remove_action",
    "remove_filter",
    "has_action",
    "has_filter",
    "do_action_ref_array",
    "apply_filters_ref_array",
)

UNKNOWN_KIND = "unknown"

_LABELS: dict[str, str] = {kind: kind for kind in HOOK_KINDS}

_DESCRIPTIONS: dict[str, str] = {
    "add_action": "Registers a function to run when this action hook is triggered.",
    "add_filter": "Registers a function to modify data when this filter hook is applied.",
    "do_action": "Triggers all functions attached to this action hook.",
    "apply_filters": "Applies all functions attached to this filter hook to modify the data.",
    "remove_action": "Removes a previously registered action hook function.",
    "remove_filter": "Removes a previously registered filter hook function.",
    "has_action": "Checks if any functions are attached to this action hook.",
    "has_filter": "Checks if any functions are attached to this filter hook.",
}

_UNKNOWN_DESCRIPTION = "Unknown hook usage pattern."

# Cheap line-prefix test only. Trailing comments and the inside of
# multi-line block comments that don't start with "*" still get matched.
_COMMENT_PREFIXES = ("//", "/*", "*")


def label_for(kind: str) -> str:
    """Display label for a hook kind, the kind itself when unknown."""
    return _LABELS.get(kind, kind)


def describe(kind: str) -> str:
    """One-sentence explanation of what a hook kind does."""
    return _DESCRIPTIONS.get(kind, _UNKNOWN_DESCRIPTION)


@lru_cache(maxsize=64)
def _patterns_for(target: str) -> tuple[tuple[str, re.Pattern[str]], ...]:
    """Compile one regex per kind, anchored on the literal first argument."""
    name = re.escape(target)
    return tuple(
        (kind, re.compile(rf"\b{re.escape(kind)}\s*\(\s*(['\"]){name}\1\s*[,)]"))
        for kind in HOOK_KINDS
    )


def is_comment_or_blank(line: str) -> bool:
    """Check a trimmed line against the blank / comment-prefix heuristic."""
    return not line or line.startswith(_COMMENT_PREFIXES)


def match_line(line: str, target: str) -> list[str]:
    """Return every kind whose call on *line* names *target* exactly.

    *line* must already be trimmed. Names passed through variables,
    constants or concatenation are not seen.
    """
    if not target or is_comment_or_blank(line):
        return []
    return [kind for kind, regex in _patterns_for(target) if regex.search(line)]


def read_lines(file_path: Path) -> list[str]:
    """Read a file as lines with line endings removed.

    Only LF, CR and CRLF end a line; form feeds and other Unicode
    separators stay inside it. Line numbers in search results and in the
    detail view both come from here.
    """
    with open(file_path, encoding="utf-8", errors="replace") as f:
        return [raw.rstrip("\r\n") for raw in f]


def find_matches(file_path: Path, target: str) -> list[MatchRecord]:
    """Scan a file line by line for call-sites naming *target*.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    records: list[MatchRecord] = []
    for number, raw in enumerate(read_lines(file_path), start=1):
        line = raw.strip()
        for kind in match_line(line, target):
            records.append(
                MatchRecord(file=file_path, line=number, kind=kind, snippet=line, target=target)
            )
    if records:
        log.debug("Found %d match(es) for '%s' in %s", len(records), target, file_path)
    return records


def classify_line(code: str) -> str:
    """Crude construct label for the detail view.

    Plain substring test over the eight base kinds with no argument check,
    so a ``do_action_ref_array`` call is labelled ``do_action``.
    """
    for kind in HOOK_KINDS[:8]:
        if kind in code:
            return kind
    return UNKNOWN_KIND
