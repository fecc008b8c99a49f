# src/export/models.py — v1
"""Export models: ExportUnit, ExportResult, ArchiveResult."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ExportUnit(BaseModel):
    """One independent single-file download."""

    model_config = ConfigDict(frozen=True)

    name: str
    data: bytes = Field(repr=False)
    source_path: str = ""


class ExportResult(BaseModel):
    """Outcome of exporting every record of a batch individually."""

    units: list[ExportUnit] = Field(default_factory=list)
    omitted: int = 0
    omitted_paths: list[str] = Field(default_factory=list)


class ArchiveResult(BaseModel):
    """Outcome of packing a batch into a single archive."""

    label: str
    data: bytes = Field(repr=False)
    entry_names: list[str] = Field(default_factory=list)
    omitted: int = 0
    omitted_paths: list[str] = Field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.entry_names)
