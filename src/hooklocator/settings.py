"""JSON-backed settings and the resolved scanner configuration."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hooklocator.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "hooklocator"
_SETTINGS_FILE = "settings.json"

DEFAULT_EXTENSION = ".php"
DEFAULT_MAX_FILES = 1000
DEFAULT_MAX_FILE_BYTES = 1_048_576
DEFAULT_DETAIL_RADIUS = 5


class SettingsError(Exception):
    """Raised when a setting cannot be stored."""


def _as_path(value: Any) -> str:
    text = str(value).strip()
    if not text:
        raise SettingsError("Path must not be empty.")
    return str(Path(text).expanduser())


def _as_count(value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise SettingsError(f"Expected a positive integer, got {value!r}.")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise SettingsError(f"Expected a positive integer, got {value!r}.")
    if number <= 0:
        raise SettingsError(f"Expected a positive integer, got {number}.")
    return number


def _as_extension(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"Expected a file extension such as '.php', got {value!r}.")
    return normalize_extension(value)


# Every key the scanner reads, with the function that checks a new value.
KNOWN_KEYS: dict[str, Callable[[Any], Any]] = {
    "paths.plugins": _as_path,
    "paths.themes": _as_path,
    "paths.self": _as_path,
    "scan.extension": _as_extension,
    "scan.max_files": _as_count,
    "scan.max_file_bytes": _as_count,
    "detail.radius": _as_count,
}


class Settings:
    """Scanner settings stored as nested JSON objects.

    Keys use dots for nesting, so ``scan.max_files`` lives at
    ``data["scan"]["max_files"]``. Reads accept any key. Writes only accept
    the keys in ``KNOWN_KEYS`` and store the checked value, so a bad value is
    rejected when it is set rather than when a scan starts.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> Any:
        """Check *value* for *key*, store it and save the file.

        Returns the value as stored.

        Raises:
            SettingsError: If *key* is unknown, *value* is rejected, or the
                file cannot be written.
        """
        check = KNOWN_KEYS.get(key)
        if check is None:
            raise SettingsError(f"Unknown setting: {key}")
        stored = check(value)

        *parents, leaf = key.split(".")
        node = self._data
        for part in parents:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[leaf] = stored
        self._save()
        log.info("Set %s = %r in %s", key, stored, self._path)
        return stored

    def unset(self, key: str) -> bool:
        """Remove *key* so its default applies again. Returns False if it was not set."""
        *parents, leaf = key.split(".")
        node: Any = self._data
        for part in parents:
            node = node.get(part) if isinstance(node, dict) else None
        if not isinstance(node, dict) or leaf not in node:
            return False
        del node[leaf]
        self._prune()
        self._save()
        log.info("Unset %s in %s", key, self._path)
        return True

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(dotted_key, value)`` for every stored leaf, in key order."""

        def walk(node: dict[str, Any], prefix: str) -> Iterator[tuple[str, Any]]:
            for name in sorted(node):
                value = node[name]
                key = f"{prefix}{name}"
                if isinstance(value, dict):
                    yield from walk(value, f"{key}.")
                else:
                    yield key, value

        yield from walk(self._data, "")

    def _prune(self) -> None:
        for name in [n for n, v in self._data.items() if v == {}]:
            del self._data[name]

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: top level is not an object", self._path)
            return
        self._data = data

    def _save(self) -> None:
        """Write the file through a temp file in the same directory."""
        text = json.dumps(self._data, indent=2, ensure_ascii=False) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".settings_", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp_name, self._path)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise SettingsError(f"Could not save settings to {self._path}: {e}") from e


def normalize_extension(ext: str) -> str:
    """Return *ext* lower-cased with a single leading dot ("PHP" -> ".php")."""
    ext = ext.strip().lower()
    if not ext:
        return DEFAULT_EXTENSION
    return ext if ext.startswith(".") else f".{ext}"


def _package_dir() -> Path:
    return Path(__file__).resolve().parent


def _positive_int(value: Any, default: int, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        log.warning("Invalid value for %s: %r, using %d", name, value, default)
        return default
    if number <= 0:
        log.warning("Non-positive value for %s: %d, using %d", name, number, default)
        return default
    return number


@dataclass(frozen=True, slots=True)
class LocatorConfig:
    """Everything a scan needs from the host environment."""

    plugins_dir: Path
    themes_dir: Path
    self_dir: Path | None = None
    extension: str = DEFAULT_EXTENSION
    max_files: int = DEFAULT_MAX_FILES
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    detail_radius: int = DEFAULT_DETAIL_RADIUS

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        plugins_dir: Path | None = None,
        themes_dir: Path | None = None,
    ) -> LocatorConfig:
        """Build a config from stored settings, with optional path overrides."""
        content = Path.cwd() / "wp-content"
        self_dir = settings.get("paths.self")
        return cls(
            plugins_dir=plugins_dir or Path(settings.get("paths.plugins", content / "plugins")),
            themes_dir=themes_dir or Path(settings.get("paths.themes", content / "themes")),
            self_dir=Path(self_dir) if self_dir else _package_dir(),
            extension=normalize_extension(str(settings.get("scan.extension", DEFAULT_EXTENSION))),
            max_files=_positive_int(settings.get("scan.max_files", DEFAULT_MAX_FILES), DEFAULT_MAX_FILES, "scan.max_files"),
            max_file_bytes=_positive_int(
                settings.get("scan.max_file_bytes", DEFAULT_MAX_FILE_BYTES),
                DEFAULT_MAX_FILE_BYTES,
                "scan.max_file_bytes",
            ),
            detail_radius=_positive_int(
                settings.get("detail.radius", DEFAULT_DETAIL_RADIUS),
                DEFAULT_DETAIL_RADIUS,
                "detail.radius",
            ),
        )
