"""Search and detail orchestration."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from hooklocator.core import roots as roots_mod
from hooklocator.core.assembler import aggregate
from hooklocator.core.detail import resolve as resolve_detail
from hooklocator.core.matcher import find_matches
from hooklocator.core.reference import build_reference
from hooklocator.core.view import sort_and_page
from hooklocator.core.walker import walk
from hooklocator.models.detail import DetailView
from hooklocator.models.match import MatchRecord, ScanBudget, ScanFailure, SearchResult
from hooklocator.models.result_page import ResultPage
from hooklocator.models.scan_root import ScanRoot
from hooklocator.settings import LocatorConfig

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]  # (root_key, status_message)


class HookLocator:
    """Stateless entry point for listing roots, searching and showing detail.

    Nothing is cached between calls: each search enumerates roots and walks
    the filesystem again with a fresh budget.
    """

    def __init__(self, config: LocatorConfig) -> None:
        self.config = config

    def list_roots(self) -> set[ScanRoot]:
        return roots_mod.list_roots(self.config.plugins_dir, self.config.themes_dir, self.config.self_dir)

    def grouped_roots(self) -> dict[str, list[ScanRoot]]:
        """Roots grouped into plugins and themes, each sorted by name."""
        return roots_mod.grouped_roots(self.list_roots())

    def search(
        self,
        target: str,
        scope: str = roots_mod.SCOPE_ALL,
        on_progress: ProgressCallback | None = None,
    ) -> SearchResult:
        """Find every call-site naming *target* within *scope*.

        Args:
            target: Literal hook name. Blank names give an empty result.
            scope: ``"all"`` or a single root key from list_roots().
            on_progress: Optional callback for per-root progress updates.

        Returns:
            The keyed records together with budget and failure details.
        """
        target = (target or "").strip()
        result = SearchResult(target=target, scope=scope)
        if not target:
            log.info("Empty hook name, nothing to search")
            return result

        selected = roots_mod.resolve_scope(self.list_roots(), scope)
        budget = ScanBudget(max_files=self.config.max_files, max_file_bytes=self.config.max_file_bytes)
        started = time.monotonic()

        for root in selected:
            if budget.tripped:
                break
            if on_progress:
                on_progress(root.key, "scanning")
            files = walk([root], budget, self.config.extension, on_failure=result.failures.append)
            aggregate((self._matches_in(path, target, result.failures) for path in files), into=result.records)
            if on_progress:
                on_progress(root.key, "done")

        result.files_scanned = budget.files_scanned
        result.truncated = budget.tripped
        result.elapsed = time.monotonic() - started
        log.info(
            "Searched '%s' in %s: %d match(es) across %d file(s)%s",
            target,
            scope,
            len(result.records),
            budget.files_scanned,
            " (file budget reached)" if result.truncated else "",
        )
        return result

    @staticmethod
    def _matches_in(path: Path, target: str, failures: list[ScanFailure]) -> list[MatchRecord]:
        try:
            return find_matches(path, target)
        except OSError as e:
            log.debug("Cannot read file %s: %s", path, e)
            failures.append(ScanFailure(path=path, kind="file", message=str(e)))
            return []

    @staticmethod
    def page(
        result: SearchResult,
        sort_key: str = "file",
        sort_dir: str = "asc",
        page_number: int = 1,
    ) -> ResultPage:
        return sort_and_page(result.records, sort_key, sort_dir, page_number)

    @staticmethod
    def build_reference(file: Path | str, line: int) -> str:
        return build_reference(file, line)

    def resolve(self, ref: str) -> DetailView:
        """Build the detail view for a reference; raises DetailError subclasses."""
        return resolve_detail(
            ref,
            radius=self.config.detail_radius,
            plugins_dir=self.config.plugins_dir,
            themes_dir=self.config.themes_dir,
        )
