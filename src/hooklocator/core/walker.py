"""Budgeted recursive walk over scan roots."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator

from hooklocator.models.match import ScanBudget, ScanFailure
from hooklocator.models.scan_root import ScanRoot
from hooklocator.settings import DEFAULT_EXTENSION, normalize_extension

log = logging.getLogger(__name__)

FailureCallback = Callable[[ScanFailure], None]


class _BudgetExhausted(Exception):
    """Internal signal that the shared file budget has run out."""


def walk(
    roots: Iterable[ScanRoot],
    budget: ScanBudget,
    extension: str = DEFAULT_EXTENSION,
    on_failure: FailureCallback | None = None,
) -> Iterator[Path]:
    """Yield eligible files below *roots* that are small enough to read.

    Every eligible file counts against ``budget.files_scanned``, including
    oversized ones that are skipped. Once the budget is exhausted the walk
    stops across all remaining roots. Unreadable directories are reported
    through *on_failure* and the walk continues with their siblings.

    Within a directory, files come before subdirectories and both are
    visited in name order, so repeated walks of an unchanged tree agree.
    """
    ext = normalize_extension(extension)
    try:
        for root in roots:
            log.debug("Walking %s (%s)", root.key, root.path)
            yield from _walk_dir(root.path, budget, ext, on_failure)
    except _BudgetExhausted:
        log.info("File budget of %d reached, stopping walk", budget.max_files)


def _report(on_failure: FailureCallback | None, path: Path, kind: str, exc: OSError) -> None:
    log.debug("Cannot read %s %s: %s", kind, path, exc)
    if on_failure:
        on_failure(ScanFailure(path=path, kind=kind, message=str(exc)))


def _walk_dir(
    directory: Path,
    budget: ScanBudget,
    ext: str,
    on_failure: FailureCallback | None,
) -> Iterator[Path]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        _report(on_failure, directory, "directory", e)
        return

    subdirs: list[Path] = []
    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(Path(entry.path))
                continue
            if not entry.is_file() or os.path.splitext(entry.name)[1].lower() != ext:
                continue
            size = entry.stat().st_size
        except OSError as e:
            _report(on_failure, Path(entry.path), "file", e)
            continue

        if budget.exhausted:
            budget.tripped = True
            raise _BudgetExhausted
        budget.files_scanned += 1

        if size > budget.max_file_bytes:
            log.debug("Skipping oversized file (%d bytes): %s", size, entry.path)
            continue
        yield Path(entry.path)

    for subdir in subdirs:
        yield from _walk_dir(subdir, budget, ext, on_failure)
