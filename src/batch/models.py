# src/batch/models.py — v2
"""Batch models: FileRecord, FolderContext, BatchResult."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

BatchOrigin = Literal["folder", "flat"]


class FileRecord(BaseModel):
    """One input file with its original and normalized names.

    ``content`` is the originating RawFile handle; bytes are only read at
    export time.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    original_name: str
    original_path: str
    normalized_name: str
    normalized_path: str
    changed: bool
    size: int = 0
    content: Any = Field(default=None, exclude=True, repr=False)
    content_available: bool = True
    error: str | None = None


class FolderContext(BaseModel):
    """Top-level folder of a folder selection, normalized."""

    model_config = ConfigDict(frozen=True)

    folder_name: str


class BatchResult(BaseModel):
    """Ordered records of one submission (insertion order = input order)."""

    model_config = ConfigDict(frozen=True)

    batch_id: str = ""
    origin: BatchOrigin = "flat"
    folder: FolderContext | None = None
    records: tuple[FileRecord, ...] = ()

    @classmethod
    def empty(cls) -> BatchResult:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def changed_count(self) -> int:
        return sum(1 for r in self.records if r.changed)

    @property
    def unavailable_count(self) -> int:
        return sum(1 for r in self.records if not r.content_available)

    def __len__(self) -> int:
        return len(self.records)
