"""Scan root dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

PLUGIN = "plugin"
THEME = "theme"


@dataclass(frozen=True, slots=True)
class ScanRoot:
    """One directory tree eligible for scanning.

    ``key`` is ``"<category>:<name>"`` and identifies exactly one path.
    """

    key: str
    category: str
    path: Path

    @property
    def name(self) -> str:
        return self.path.name
