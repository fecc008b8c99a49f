# src/export/exporter_factory.py — v1
"""Factory: pick the export strategy once from configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nfcname.export.archive_builder import ZipArchiveBuilder
from nfcname.export.base_exporter import BaseExporter
from nfcname.export.flat_exporter import FlatExporter

if TYPE_CHECKING:
    from nfcname.batch.models import BatchResult
    from nfcname.config.settings import Settings
    from nfcname.export.models import ArchiveResult, ExportResult

logger = logging.getLogger(__name__)


def create_exporter(settings: Settings) -> BaseExporter:
    """Create the exporter matching ARCHIVE_* settings."""
    if not settings.archive_enabled:
        logger.debug("Archiving disabled, using flat exporter")
        return FlatExporter(collision_policy=settings.collision_policy)

    return ZipArchiveBuilder(
        compression=settings.archive_compression,
        compression_level=settings.archive_compression_level,
        extension=settings.archive_extension,
        collision_policy=settings.collision_policy,
    )


async def export_batch(
    batch: BatchResult, exporter: BaseExporter,
) -> ArchiveResult | ExportResult:
    """Archive folder-origin batches when possible, else export each file."""
    if batch.origin == "folder" and exporter.supports_archive:
        return await exporter.build_archive(batch)
    return await exporter.export_each(batch)
