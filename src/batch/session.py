# src/batch/session.py — v2
"""Batch session — owns the current BatchResult and its lifecycle.

States: IDLE -> INGESTING -> READY -> EXPORTING -> IDLE.

A submission made while another one is still ingesting cancels the stale
ingest; if the stale one completes anyway its result is discarded. The
current batch is swapped in a single assignment, so readers always see
either the previous batch or the new one.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from nfcname.batch.models import BatchResult
from nfcname.batch.processor import BatchProcessor, ProgressCallback
from nfcname.core.normalizer import ensure_normalization_supported
from nfcname.errors import NfcNameError
from nfcname.export.exporter_factory import export_batch
from nfcname.logging.context import set_stage

if TYPE_CHECKING:
    from nfcname.batch.sources import RawFile
    from nfcname.config.settings import Settings
    from nfcname.export.base_exporter import BaseExporter
    from nfcname.export.models import ArchiveResult, ExportResult

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    IDLE = "idle"
    INGESTING = "ingesting"
    READY = "ready"
    EXPORTING = "exporting"


class BatchSession:
    """Submit file selections and export the latest completed batch."""

    def __init__(
        self,
        exporter: BaseExporter,
        settings: Settings | None = None,
        processor: BatchProcessor | None = None,
    ) -> None:
        if settings is None:
            from nfcname.config.settings import Settings

            settings = Settings()
        ensure_normalization_supported(settings.normalization_form)
        self._exporter = exporter
        self._processor = processor or BatchProcessor(settings)
        self._current = BatchResult.empty()
        self._state = SessionState.IDLE
        self._task: asyncio.Task[BatchResult] | None = None
        self._generation = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current(self) -> BatchResult:
        return self._current

    async def submit(
        self,
        files: Sequence[RawFile],
        on_progress: ProgressCallback | None = None,
        is_folder_selection: bool | None = None,
    ) -> BatchResult | None:
        """Ingest a new selection, replacing the current batch.

        Returns:
            The new BatchResult, or None if a later submission superseded
            this one before it finished.
        """
        self._generation += 1
        generation = self._generation
        self._cancel_inflight()

        self._state = SessionState.INGESTING
        task = asyncio.create_task(
            self._processor.process_batch(files, on_progress, is_folder_selection)
        )
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info("Discarding superseded batch submission")
                return None
            logger.info("Batch submission cancelled")
            self._settle()
            raise
        except Exception:
            if generation == self._generation:
                self._settle()
            raise

        if generation != self._generation:
            logger.info("Discarding superseded batch result")
            return None

        self._task = None
        self._current = result
        self._state = SessionState.IDLE if result.is_empty else SessionState.READY
        return result

    def clear(self) -> None:
        """Drop the current batch and any in-flight ingest."""
        self._generation += 1
        self._cancel_inflight()
        self._current = BatchResult.empty()
        self._state = SessionState.IDLE
        logger.debug("Session cleared")

    async def export(self) -> ArchiveResult | ExportResult:
        """Export the current batch with the configured strategy.

        Raises:
            NfcNameError: If there is nothing ready to export.
        """
        if self._state is SessionState.INGESTING:
            raise NfcNameError("Cannot export while a batch is being ingested")
        if self._current.is_empty:
            raise NfcNameError("Nothing to export: the current batch is empty")

        batch = self._current
        self._state = SessionState.EXPORTING
        set_stage("export")
        try:
            return await export_batch(batch, self._exporter)
        finally:
            set_stage(None)
            if self._state is SessionState.EXPORTING:
                self._state = SessionState.IDLE

    def _settle(self) -> None:
        """Leave INGESTING after a failed or cancelled submission."""
        self._task = None
        self._state = SessionState.IDLE if self._current.is_empty else SessionState.READY

    def _cancel_inflight(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.info("Cancelled in-flight batch ingest")
        self._task = None
