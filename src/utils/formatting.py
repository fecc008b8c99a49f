# src/utils/formatting.py — v1
"""Display helpers for the before/after listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nfcname.batch.models import FileRecord

_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """Human-readable size: '0 Bytes', '512 Bytes', '1.5 KB', '2.25 MB'."""
    if size <= 0:
        return "0 Bytes"
    i = 0
    while size >= 1024 ** (i + 1) and i < len(_UNITS) - 1:
        i += 1
    value = f"{size / 1024**i:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_UNITS[i]}"


def describe_record(record: FileRecord) -> str:
    """One status line: size, change status and content availability."""
    status = "Normalized" if record.changed else "No change needed"
    line = f"{format_file_size(record.size)} · {status}"
    if not record.content_available:
        line += " · content unavailable"
    return line
