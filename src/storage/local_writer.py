# src/storage/local_writer.py — v4
"""Local filesystem output writer (default backend)."""

from __future__ import annotations

from pathlib import Path

from nfcname.storage.base_output_writer import BaseOutputWriter


class LocalWriter(BaseOutputWriter):
    """Write outputs under a base directory on the local filesystem."""

    def __init__(self, base_path: str | Path | None = None) -> None:
        """Initialize with optional base path.

        Args:
            base_path: Root directory for all writes. If None, paths are used as given.
        """
        self._base = Path(base_path) if base_path else None

    def _resolve(self, path: str) -> Path:
        """Resolve a path relative to base_path, refusing to escape it."""
        if self._base is None:
            return Path(path)
        rel = Path(path.lstrip("/"))
        if ".." in rel.parts:
            raise ValueError(f"Refusing to write outside output root: {path!r}")
        return self._base / rel

    async def write(self, path: str, content: bytes) -> str:
        p = self._resolve(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
        return str(p)

    async def exists(self, path: str) -> bool:
        return self._resolve(path).exists()
