# src/export/flat_exporter.py — v1
"""Flat exporter — used when archiving is disabled.

Every batch, folder-origin included, is exported as independent files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nfcname.export.base_exporter import BaseExporter

if TYPE_CHECKING:
    from nfcname.batch.models import BatchResult
    from nfcname.export.models import ArchiveResult


class FlatExporter(BaseExporter):
    """Exporter without archive capability."""

    @property
    def supports_archive(self) -> bool:
        return False

    async def build_archive(self, batch: BatchResult) -> ArchiveResult:
        raise NotImplementedError("Archiving is disabled; use export_each()")
