# src/batch/processor.py — v2
"""Batch processor — normalize the names of a file selection.

Workflow per submission:
    1. Decide folder/flat origin (explicit discriminant, else relative paths)
    2. For each file in input order: normalize its path, probe its content,
       build a FileRecord, report progress, yield to the event loop
    3. Return an immutable BatchResult

One unreadable file never aborts the batch: its record is kept with
content_available=False and excluded later at export time.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from nfcname.batch.models import BatchResult, FileRecord, FolderContext
from nfcname.core.normalizer import normalize
from nfcname.core.path_normalizer import normalize_path, top_segment
from nfcname.errors import UnreadableContentError
from nfcname.logging.context import set_batch_context, set_stage

if TYPE_CHECKING:
    from nfcname.batch.sources import RawFile
    from nfcname.config.settings import Settings

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class BatchProcessor:
    """Turn a sequence of RawFile handles into a BatchResult."""

    def __init__(self, settings: Settings | None = None) -> None:
        if settings is None:
            from nfcname.config.settings import Settings

            settings = Settings()
        self._settings = settings

    async def process_batch(
        self,
        files: Sequence[RawFile],
        on_progress: ProgressCallback | None = None,
        is_folder_selection: bool | None = None,
    ) -> BatchResult:
        """Normalize every file of the selection, in order.

        Args:
            files: Ordered selection. Empty input returns an empty batch.
            on_progress: Called as ``on_progress(done, total)`` after each
                record is produced; never called for empty input.
            is_folder_selection: Explicit origin. None infers it from the
                presence of any relative path.

        Returns:
            BatchResult with exactly one record per input file.
        """
        if not files:
            logger.debug("Empty selection, nothing to process")
            return BatchResult.empty()

        batch_id = _generate_batch_id()
        set_batch_context(batch_id, stage="ingest")
        t0 = time.perf_counter()

        if is_folder_selection is None:
            is_folder_selection = any(f.relative_path for f in files)

        total = len(files)
        records: list[FileRecord] = []
        try:
            for index, raw in enumerate(files):
                record = await self._build_record(raw, is_folder_selection)
                records.append(record)
                if on_progress is not None:
                    on_progress(index + 1, total)
                await asyncio.sleep(self._settings.progress_yield_seconds)
        finally:
            set_stage(None)

        folder = None
        if is_folder_selection:
            folder = _folder_context(files, records)

        result = BatchResult(
            batch_id=batch_id,
            origin="folder" if is_folder_selection else "flat",
            folder=folder,
            records=tuple(records),
        )
        logger.info(
            "Batch complete: %d files, %d changed, %d unavailable (%.2fs)",
            total, result.changed_count, result.unavailable_count,
            time.perf_counter() - t0,
        )
        return result

    async def _build_record(self, raw: RawFile, folder_origin: bool) -> FileRecord:
        """Normalize one file's name and path and probe its content."""
        form = self._settings.normalization_form

        normalized_name = normalize(raw.name, form)
        if folder_origin and raw.relative_path:
            original_path = raw.relative_path
            normalized_path = normalize_path(original_path, form).normalized_path
        else:
            original_path = raw.name
            normalized_path = normalized_name

        available = True
        error = None
        try:
            await raw.check_readable()
        except UnreadableContentError as exc:
            available = False
            error = str(exc)
            logger.warning("Content unavailable for %s: %s", raw.source_path, exc.reason)

        changed = raw.name != normalized_name or original_path != normalized_path
        if changed:
            logger.debug("Normalized %r -> %r", original_path, normalized_path)

        return FileRecord(
            original_name=raw.name,
            original_path=original_path,
            normalized_name=normalized_name,
            normalized_path=normalized_path,
            changed=changed,
            size=raw.size,
            content=raw,
            content_available=available,
            error=error,
        )


def _folder_context(
    files: Sequence[RawFile], records: list[FileRecord],
) -> FolderContext | None:
    """Folder named by the leading segment of the first relative path."""
    for raw, record in zip(files, records):
        if raw.relative_path:
            name = top_segment(record.normalized_path)
            if name:
                return FolderContext(folder_name=name)
    return None


def _generate_batch_id() -> str:
    """Generate a batch ID: yyyymmdd_hhmmss_{uuid4_short}."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"{ts}_{uuid.uuid4().hex[:8]}"
