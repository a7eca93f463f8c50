"""Result page dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field

from hooklocator.models.match import MatchRecord


@dataclass(slots=True)
class ResultPage:
    """Sorted slice of a match collection."""

    items: list[MatchRecord] = field(default_factory=list)
    page: int = 1
    per_page: int = 25
    total_items: int = 0
    total_pages: int = 0
    sort_key: str = "file"
    sort_dir: str = "asc"

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
