"""Match and scan outcome dataclasses."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from pathlib import Path


def identity_key(file: Path | str, line: int, target: str, kind: str) -> str:
    """Stable hash of the (file, line, target, kind) quadruple."""
    raw = f"{file}-{line}-{target}-{kind}"
    return hashlib.md5(raw.encode("utf-8")).hexdigest()


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """Single call-site naming the searched hook."""

    file: Path
    line: int
    kind: str
    snippet: str
    target: str

    @property
    def key(self) -> str:
        return identity_key(self.file, self.line, self.target, self.kind)


@dataclass(slots=True)
class ScanBudget:
    """File counters shared by every root of one search."""

    max_files: int
    max_file_bytes: int
    files_scanned: int = 0
    tripped: bool = False  # an eligible file was turned away

    @property
    def exhausted(self) -> bool:
        return self.files_scanned >= self.max_files


@dataclass(frozen=True, slots=True)
class ScanFailure:
    """A directory or file that could not be read during a search."""

    path: Path
    kind: str  # "directory" or "file"
    message: str


@dataclass(slots=True)
class SearchResult:
    """Outcome of one search request."""

    target: str
    scope: str
    records: dict[str, MatchRecord] = field(default_factory=dict)
    files_scanned: int = 0
    truncated: bool = False
    failures: list[ScanFailure] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def partial(self) -> bool:
        """Whether some part of the tree could not be read."""
        return bool(self.failures)
