"""Opaque references to a single (file, line) pair."""

from __future__ import annotations

import base64
import binascii
import os
from pathlib import Path

from hooklocator.models.detail import DetailRef

_SEPARATOR = "|"


class DetailError(Exception):
    """Raised when a match cannot be resolved for the detail view."""

    message = "Could not resolve the requested match."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidReference(DetailError):
    message = "Invalid detail identifier."


class FileNotFound(DetailError):
    message = "File not found or not accessible."


class InvalidLine(DetailError):
    message = "Invalid line number."


def build_reference(file: Path | str, line: int) -> str:
    """Encode a file path and line number into one URL-safe string."""
    raw = f"{file}{_SEPARATOR}{line}".encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_reference(ref: str) -> DetailRef:
    """Decode and validate a reference made by build_reference().

    Checks run in order: encoding and shape, then the file, then the line.

    Raises:
        InvalidReference: If *ref* is not valid base64 text or does not hold
            exactly two ``|``-separated parts.
        FileNotFound: If the file is missing or unreadable.
        InvalidLine: If the line is not a positive integer.
    """
    try:
        decoded = base64.b64decode(ref.encode("ascii"), altchars=b"-_", validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        raise InvalidReference()

    parts = decoded.split(_SEPARATOR)
    if len(parts) != 2:
        raise InvalidReference("Invalid detail format.")

    file_str, line_str = parts[0], parts[1].strip()
    file = Path(file_str)
    if not file_str or not file.is_file() or not os.access(file, os.R_OK):
        raise FileNotFound()

    try:
        line = int(line_str)
    except ValueError:
        raise InvalidLine()
    if line <= 0:
        raise InvalidLine()

    return DetailRef(file=file, line=line)
