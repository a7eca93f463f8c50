"""Detail view dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DetailRef:
    """Decoded and validated pointer to one line of one file."""

    file: Path
    line: int


@dataclass(frozen=True, slots=True)
class ContextLine:
    number: int
    text: str
    is_target: bool = False


@dataclass(slots=True)
class DetailView:
    """Context window around a single match.

    ``kind`` is a display label only: it comes from a plain substring test
    on the target line, not from the argument-anchored matcher.
    """

    file: Path
    line: int
    kind: str
    lines: list[ContextLine] = field(default_factory=list)
    start: int = 0
    end: int = 0
    total_lines: int = 0
    file_size: int = 0
    origin: str = "file"
    display_path: str = ""

    @property
    def target_text(self) -> str:
        for ctx in self.lines:
            if ctx.is_target:
                return ctx.text
        return ""
