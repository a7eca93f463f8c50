"""Enumeration of plugin-like and theme-like scan roots."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from hooklocator.models.scan_root import PLUGIN, THEME, ScanRoot
from hooklocator.utils import is_within

log = logging.getLogger(__name__)

SCOPE_ALL = "all"


def _subdirectories(container: Path) -> list[Path]:
    """Immediate subdirectories of *container*; missing containers are empty."""
    if not container.is_dir():
        log.debug("Container does not exist: %s", container)
        return []
    try:
        return sorted(p for p in container.iterdir() if p.is_dir())
    except OSError as e:
        log.warning("Cannot list %s: %s", container, e)
        return []


def list_roots(
    plugins_dir: Path,
    themes_dir: Path,
    self_dir: Path | None = None,
) -> set[ScanRoot]:
    """List every subdirectory of both containers as a ScanRoot.

    A plugin root that is, or contains, *self_dir* is left out so the
    scanner never walks its own install.
    """
    roots: set[ScanRoot] = set()

    for path in _subdirectories(plugins_dir):
        if self_dir is not None and is_within(self_dir, path):
            log.debug("Skipping own install directory: %s", path)
            continue
        roots.add(ScanRoot(key=f"{PLUGIN}:{path.name}", category=PLUGIN, path=path))

    for path in _subdirectories(themes_dir):
        roots.add(ScanRoot(key=f"{THEME}:{path.name}", category=THEME, path=path))

    return roots


def grouped_roots(roots: Iterable[ScanRoot]) -> dict[str, list[ScanRoot]]:
    """Group roots by category for display, alphabetically by name."""
    grouped: dict[str, list[ScanRoot]] = {"plugins": [], "themes": []}
    for root in roots:
        if root.category == PLUGIN:
            grouped["plugins"].append(root)
        elif root.category == THEME:
            grouped["themes"].append(root)
    for members in grouped.values():
        members.sort(key=lambda r: r.name)
    return grouped


def resolve_scope(roots: Iterable[ScanRoot], scope: str) -> list[ScanRoot]:
    """Select the roots a search covers.

    ``"all"`` returns every root in key order; any other value must be a
    root key. Unknown keys select nothing.
    """
    ordered = sorted(roots, key=lambda r: r.key)
    if scope == SCOPE_ALL:
        return ordered
    selected = [r for r in ordered if r.key == scope]
    if not selected:
        log.info("Unknown scope '%s', nothing to scan", scope)
    return selected
