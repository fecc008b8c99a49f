# src/api/facade.py — v2
"""Public API facade — preview and export in one call each.

Usage:
    from nfcname.api.facade import normalize_files, preview
    batch = await preview([Path("Photos")])
    summary = await normalize_files([Path("Photos")], Path("./output"))

A single directory argument is a folder selection; anything else is a flat
selection of files.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from nfcname.api.models import RunSummary
from nfcname.batch.processor import BatchProcessor, ProgressCallback
from nfcname.batch.sources import RawFile, collect_files, scan_folder
from nfcname.config.settings import Settings
from nfcname.core.normalizer import ensure_normalization_supported
from nfcname.export.delivery import deliver_archive, deliver_units
from nfcname.export.exporter_factory import create_exporter, export_batch
from nfcname.export.models import ArchiveResult
from nfcname.storage.writer_factory import create_writer

if TYPE_CHECKING:
    from nfcname.batch.models import BatchResult

logger = logging.getLogger(__name__)


def select_files(
    paths: Sequence[Path], settings: Settings,
) -> tuple[list[RawFile], bool]:
    """Turn CLI/API paths into a selection and its folder discriminant."""
    if len(paths) == 1 and Path(paths[0]).is_dir():
        files = scan_folder(
            Path(paths[0]),
            recursive=settings.scan_recursive,
            include_hidden=settings.scan_include_hidden,
        )
        return files, True
    return collect_files(paths), False


async def preview(
    paths: Sequence[Path],
    settings: Settings | None = None,
    on_progress: ProgressCallback | None = None,
) -> BatchResult:
    """Normalize names of the selected files without exporting anything."""
    settings = settings or Settings()
    ensure_normalization_supported(settings.normalization_form)

    files, is_folder = select_files(paths, settings)
    processor = BatchProcessor(settings)
    return await processor.process_batch(files, on_progress, is_folder)


async def normalize_files(
    paths: Sequence[Path],
    output_dir: Path | None = None,
    settings: Settings | None = None,
    on_progress: ProgressCallback | None = None,
) -> RunSummary:
    """Normalize, export and write the selected files.

    Folder selections become one archive when archiving is enabled;
    everything else is written file by file.
    """
    settings = settings or Settings()
    batch = await preview(paths, settings=settings, on_progress=on_progress)

    exporter = create_exporter(settings)
    writer = create_writer(settings, output_dir)
    exported = await export_batch(batch, exporter)

    archive_label = None
    if isinstance(exported, ArchiveResult):
        written = [await deliver_archive(exported, writer)]
        archive_label = exported.label
    else:
        written = await deliver_units(
            exported.units, writer, delay=settings.export_delay_seconds,
        )

    logger.info(
        "Export finished: %d written, %d omitted", len(written), exported.omitted,
    )
    return RunSummary(
        batch_id=batch.batch_id,
        origin=batch.origin,
        total_files=len(batch),
        changed=batch.changed_count,
        unavailable=batch.unavailable_count,
        omitted=exported.omitted,
        archive_label=archive_label,
        written=written,
        omitted_paths=exported.omitted_paths,
    )
