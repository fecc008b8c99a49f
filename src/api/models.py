# src/api/models.py — v2
"""API-level models: RunSummary."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RunSummary(BaseModel):
    """Return value of facade.normalize_files()."""

    batch_id: str
    origin: str
    total_files: int
    changed: int
    unavailable: int
    omitted: int
    archive_label: str | None = None
    written: list[str] = Field(default_factory=list)
    omitted_paths: list[str] = Field(default_factory=list)
