# src/batch/sources.py — v1
"""Raw file sources — the handles a batch is built from.

A RawFile exposes a leaf name, an optional folder-relative path (set only
for folder selections), a byte size and lazy async access to its bytes.

Two selection helpers mirror the two ways files reach the tool:
    collect_files(paths)  -> flat selection, input order kept
    scan_folder(root)     -> folder selection, "<root>/<relative>" paths
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from nfcname.errors import UnreadableContentError

logger = logging.getLogger(__name__)


class RawFile(ABC):
    """Abstract input file handle."""

    name: str
    relative_path: str | None
    size: int

    @property
    def source_path(self) -> str:
        """Path used for display and error messages."""
        return self.relative_path or self.name

    @abstractmethod
    async def read_bytes(self) -> bytes:
        """Return the file's bytes.

        Raises:
            UnreadableContentError: If the bytes cannot be retrieved.
        """

    async def check_readable(self) -> None:
        """Verify the bytes can be retrieved without keeping them.

        Subclasses override this with a cheaper check where one exists.

        Raises:
            UnreadableContentError: If the bytes cannot be retrieved.
        """
        await self.read_bytes()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source_path!r}, size={self.size})"


class LocalRawFile(RawFile):
    """A file on the local filesystem, read lazily."""

    def __init__(
        self,
        path: Path,
        relative_path: str | None = None,
        size: int | None = None,
    ) -> None:
        self.path = Path(path)
        self.name = self.path.name
        self.relative_path = relative_path
        if size is None:
            try:
                size = self.path.stat().st_size
            except OSError:
                size = 0
        self.size = size

    async def read_bytes(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as exc:
            raise UnreadableContentError(self.source_path, str(exc)) from exc

    async def check_readable(self) -> None:
        if not self.path.is_file():
            raise UnreadableContentError(self.source_path, "not a regular file")
        if not os.access(self.path, os.R_OK):
            raise UnreadableContentError(self.source_path, "permission denied")


class InMemoryRawFile(RawFile):
    """A file whose bytes are already in memory.

    ``data=None`` models a source whose content could not be retrieved.
    """

    def __init__(
        self,
        name: str,
        data: bytes | None,
        relative_path: str | None = None,
    ) -> None:
        self.name = name
        self.relative_path = relative_path
        self._data = data
        self.size = len(data) if data is not None else 0

    async def read_bytes(self) -> bytes:
        if self._data is None:
            raise UnreadableContentError(self.source_path, "content unavailable")
        return self._data


def collect_files(paths: Iterable[Path]) -> list[RawFile]:
    """Build a flat selection from explicit file paths.

    Raises:
        ValueError: If a path is a directory.
    """
    files: list[RawFile] = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            msg = f"Expected a file, got a directory: {path}"
            raise ValueError(msg)
        files.append(LocalRawFile(path))
    logger.info("Collected %d files (flat selection)", len(files))
    return files


def scan_folder(
    root: Path,
    recursive: bool = True,
    include_hidden: bool = False,
) -> list[RawFile]:
    """Build a folder selection from a directory.

    Every file gets ``relative_path = "<root name>/<posix relative path>"``.
    Names are kept byte-for-byte as the filesystem reports them.

    Raises:
        ValueError: If ``root`` is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        msg = f"Scan root is not a directory: {root}"
        raise ValueError(msg)

    folder_name = root.resolve().name
    files: list[RawFile] = []
    pattern_fn = root.rglob if recursive else root.glob
    for path in sorted(pattern_fn("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(root)
        if not include_hidden and any(part.startswith(".") for part in rel.parts):
            continue
        files.append(LocalRawFile(path, relative_path=f"{folder_name}/{rel.as_posix()}"))

    logger.info(
        "Scanned %s: found %d files (recursive=%s)",
        root, len(files), recursive,
    )
    return files
