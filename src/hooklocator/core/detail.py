"""Context window and classification for a single match."""

from __future__ import annotations

import logging
from pathlib import Path

from hooklocator.core.matcher import classify_line, read_lines
from hooklocator.core.reference import FileNotFound, decode_reference
from hooklocator.models.detail import ContextLine, DetailView
from hooklocator.settings import DEFAULT_DETAIL_RADIUS
from hooklocator.utils import is_within

log = logging.getLogger(__name__)

DEVELOPMENT_TIPS: tuple[str, ...] = (
    "Look for function definitions above this line to understand the context",
    "Check if this code is inside a class method or standalone function",
    "Review surrounding code to understand when this hook is triggered",
    "Consider the hook priority and number of parameters if hooking into this",
)


def context_bounds(line: int, total_lines: int, radius: int = DEFAULT_DETAIL_RADIUS) -> tuple[int, int]:
    """First and last line number (inclusive) shown around *line*.

    ``start > end`` when *line* lies past the end of the file.
    """
    start = max(1, line - radius)
    end = min(total_lines, line + radius)
    return start, end


def resolve(
    ref: str,
    radius: int = DEFAULT_DETAIL_RADIUS,
    plugins_dir: Path | None = None,
    themes_dir: Path | None = None,
) -> DetailView:
    """Re-read the referenced file and build its context window.

    Raises:
        DetailError: One of its subclasses, see decode_reference(). A read
            failure after validation is reported as FileNotFound.
    """
    target = decode_reference(ref)

    try:
        lines = read_lines(target.file)
        file_size = target.file.stat().st_size
    except OSError as e:
        log.warning("Cannot read %s for detail view: %s", target.file, e)
        raise FileNotFound("Could not read file contents.")

    total = len(lines)
    start, end = context_bounds(target.line, total, radius)
    window = [
        ContextLine(number=n, text=lines[n - 1], is_target=n == target.line)
        for n in range(start, end + 1)
    ]
    target_code = lines[target.line - 1].strip() if target.line <= total else ""

    origin, display = describe_location(target.file, plugins_dir, themes_dir)
    return DetailView(
        file=target.file,
        line=target.line,
        kind=classify_line(target_code),
        lines=window,
        start=start,
        end=end,
        total_lines=total,
        file_size=file_size,
        origin=origin,
        display_path=display,
    )


def describe_location(
    file: Path,
    plugins_dir: Path | None = None,
    themes_dir: Path | None = None,
) -> tuple[str, str]:
    """Return the file's origin ("plugin", "theme" or "file") and display path.

    The display path is relative to the container's parent, e.g.
    ``plugins/akismet/akismet.php``.
    """
    for origin, container in (("plugin", plugins_dir), ("theme", themes_dir)):
        if container is not None and is_within(file, container):
            parent = container.resolve().parent
            return origin, file.resolve().relative_to(parent).as_posix()
    return "file", str(file)
