# tests/unit/batch/test_unit_session.py — v2
"""Tests for batch/session.py — lifecycle and supersede semantics."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from nfcname.batch.session import BatchSession, SessionState
from nfcname.batch.sources import InMemoryRawFile
from nfcname.errors import NfcNameError, UnsupportedNormalizationError
from nfcname.export.archive_builder import ZipArchiveBuilder
from nfcname.export.flat_exporter import FlatExporter
from nfcname.export.models import ArchiveResult, ExportResult


class _GatedFile(InMemoryRawFile):
    """File whose readability check waits for an event."""

    def __init__(self, name: str, gate: asyncio.Event) -> None:
        super().__init__(name, b"x")
        self._gate = gate

    async def check_readable(self) -> None:
        await self._gate.wait()


class TestSubmit:
    @pytest.mark.asyncio
    async def test_submit_publishes_batch(self, settings):
        session = BatchSession(FlatExporter(), settings=settings)
        assert session.state is SessionState.IDLE
        assert session.current.is_empty

        result = await session.submit([InMemoryRawFile("a.txt", b"a")])

        assert result is session.current
        assert session.state is SessionState.READY
        assert len(session.current) == 1

    @pytest.mark.asyncio
    async def test_empty_submission_stays_idle(self, settings):
        session = BatchSession(FlatExporter(), settings=settings)
        result = await session.submit([])
        assert result is not None and result.is_empty
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_new_submission_replaces_previous(self, settings):
        session = BatchSession(FlatExporter(), settings=settings)
        await session.submit([InMemoryRawFile("old.txt", b"a")])
        await session.submit([InMemoryRawFile("new.txt", b"b")])
        assert [r.original_name for r in session.current.records] == ["new.txt"]

    @pytest.mark.asyncio
    async def test_resubmission_supersedes_inflight(self, settings):
        session = BatchSession(FlatExporter(), settings=settings)
        gate = asyncio.Event()

        first = asyncio.create_task(session.submit([_GatedFile("stale.txt", gate)]))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert session.state is SessionState.INGESTING

        second = await session.submit([InMemoryRawFile("fresh.txt", b"y")])
        gate.set()

        assert await first is None
        assert second is session.current
        assert [r.original_name for r in session.current.records] == ["fresh.txt"]
        assert session.state is SessionState.READY

    @pytest.mark.asyncio
    async def test_cancelled_submit_returns_to_idle(self, settings):
        session = BatchSession(FlatExporter(), settings=settings)
        gate = asyncio.Event()

        pending = asyncio.create_task(session.submit([_GatedFile("slow.txt", gate)]))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert session.state is SessionState.INGESTING

        pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await pending

        assert session.state is SessionState.IDLE
        assert session.current.is_empty
        with pytest.raises(NfcNameError, match="empty"):
            await session.export()

    @pytest.mark.asyncio
    async def test_cancelled_submit_keeps_previous_batch(self, settings):
        session = BatchSession(FlatExporter(), settings=settings)
        await session.submit([InMemoryRawFile("kept.txt", b"k")])
        gate = asyncio.Event()

        pending = asyncio.create_task(session.submit([_GatedFile("slow.txt", gate)]))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await pending

        assert session.state is SessionState.READY
        assert [r.original_name for r in session.current.records] == ["kept.txt"]
        result = await session.export()
        assert [u.name for u in result.units] == ["kept.txt"]

    @pytest.mark.asyncio
    async def test_failed_ingest_returns_to_idle(self, settings):
        processor = MagicMock()
        processor.process_batch = AsyncMock(side_effect=RuntimeError("disk gone"))
        session = BatchSession(FlatExporter(), settings=settings, processor=processor)

        with pytest.raises(RuntimeError, match="disk gone"):
            await session.submit([InMemoryRawFile("a.txt", b"a")])
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_clear_resets(self, settings):
        session = BatchSession(FlatExporter(), settings=settings)
        await session.submit([InMemoryRawFile("a.txt", b"a")])
        session.clear()
        assert session.current.is_empty
        assert session.state is SessionState.IDLE

    def test_unsupported_normalization_is_fatal(self, settings):
        with patch(
            "nfcname.batch.session.ensure_normalization_supported",
            side_effect=UnsupportedNormalizationError("no unicodedata"),
        ):
            with pytest.raises(UnsupportedNormalizationError):
                BatchSession(FlatExporter(), settings=settings)


class TestExport:
    @pytest.mark.asyncio
    async def test_folder_batch_exports_archive(self, settings, folder_files):
        session = BatchSession(ZipArchiveBuilder(), settings=settings)
        await session.submit(folder_files)
        result = await session.export()
        assert isinstance(result, ArchiveResult)
        assert result.entry_count == 2
        assert session.state is SessionState.IDLE
        # Batch is kept for further downloads until cleared.
        assert len(session.current) == 2

    @pytest.mark.asyncio
    async def test_flat_exporter_for_folder_batch(self, settings, folder_files):
        session = BatchSession(FlatExporter(), settings=settings)
        await session.submit(folder_files)
        result = await session.export()
        assert isinstance(result, ExportResult)
        assert [u.name for u in result.units] == ["a.txt", "b.txt"]

    @pytest.mark.asyncio
    async def test_export_empty_raises(self, settings):
        session = BatchSession(FlatExporter(), settings=settings)
        with pytest.raises(NfcNameError, match="empty"):
            await session.export()
