# tests/unit/api/test_unit_facade.py — v2
"""Tests for api.facade — public entry point."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from nfcname.api.facade import normalize_files, preview, select_files
from nfcname.batch.sources import LocalRawFile
from nfcname.config.settings import Settings
from nfcname.errors import UnsupportedNormalizationError

N_NFC = "\u00d1"
CAFE_NFD = "cafe\u0301.txt"
CAFE_NFC = "caf\u00e9.txt"


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

class TestSelectFiles:
    def test_single_directory_is_folder(self, settings, nfd_folder: Path):
        files, is_folder = select_files([nfd_folder], settings)
        assert is_folder is True
        assert [f.name for f in files] == ["a.txt", "b.txt"]
        assert all(isinstance(f, LocalRawFile) for f in files)

    def test_files_are_flat(self, settings, tmp_path: Path):
        a = tmp_path / CAFE_NFD
        a.write_bytes(b"x")
        files, is_folder = select_files([a], settings)
        assert is_folder is False
        assert files[0].relative_path is None

    def test_non_recursive_scan(self, nfd_folder: Path):
        s = Settings(_env_file=None, scan_recursive=False)
        files, _ = select_files([nfd_folder], s)
        assert [f.name for f in files] == ["a.txt"]


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

class TestPreview:
    @pytest.mark.asyncio
    async def test_folder_preview(self, settings, nfd_folder: Path):
        batch = await preview([nfd_folder], settings=settings)
        assert batch.origin == "folder"
        assert batch.folder.folder_name == N_NFC
        assert [r.normalized_path for r in batch.records] == [
            f"{N_NFC}/a.txt", f"{N_NFC}/sub/b.txt",
        ]

    @pytest.mark.asyncio
    async def test_progress_reported(self, settings, nfd_folder: Path):
        calls: list[tuple[int, int]] = []
        await preview([nfd_folder], settings=settings,
                      on_progress=lambda d, t: calls.append((d, t)))
        assert calls == [(1, 2), (2, 2)]

    @pytest.mark.asyncio
    async def test_unsupported_normalization(self, settings, tmp_path: Path):
        with patch(
            "nfcname.api.facade.ensure_normalization_supported",
            side_effect=UnsupportedNormalizationError("no NFC"),
        ):
            with pytest.raises(UnsupportedNormalizationError):
                await preview([tmp_path], settings=settings)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

class TestNormalizeFiles:
    @pytest.mark.asyncio
    async def test_folder_written_as_archive(
        self, settings, nfd_folder: Path, tmp_output_dir: Path,
    ):
        summary = await normalize_files([nfd_folder], tmp_output_dir, settings=settings)

        assert summary.origin == "folder"
        assert summary.archive_label == f"{N_NFC}.zip"
        assert summary.total_files == 2
        assert summary.changed == 2
        assert summary.omitted == 0

        archive = tmp_output_dir / f"{N_NFC}.zip"
        assert summary.written == [str(archive)]
        with zipfile.ZipFile(io.BytesIO(archive.read_bytes())) as zf:
            assert zf.namelist() == [f"{N_NFC}/a.txt", f"{N_NFC}/sub/b.txt"]

    @pytest.mark.asyncio
    async def test_flat_files_written_individually(
        self, settings, tmp_path: Path, tmp_output_dir: Path,
    ):
        src = tmp_path / "src"
        src.mkdir()
        (src / CAFE_NFD).write_bytes(b"cafe")
        (src / "plain.txt").write_bytes(b"plain")

        summary = await normalize_files(
            [src / CAFE_NFD, src / "plain.txt"], tmp_output_dir, settings=settings,
        )
        assert summary.origin == "flat"
        assert summary.archive_label is None
        assert summary.changed == 1
        assert (tmp_output_dir / CAFE_NFC).read_bytes() == b"cafe"
        assert (tmp_output_dir / "plain.txt").read_bytes() == b"plain"
        assert not (tmp_output_dir / CAFE_NFD).exists()

    @pytest.mark.asyncio
    async def test_folder_without_archive(self, nfd_folder: Path, tmp_output_dir: Path):
        s = Settings(_env_file=None, archive_enabled=False, export_delay_seconds=0)
        summary = await normalize_files([nfd_folder], tmp_output_dir, settings=s)
        assert summary.archive_label is None
        assert sorted(p.name for p in tmp_output_dir.iterdir()) == ["a.txt", "b.txt"]

    @pytest.mark.asyncio
    async def test_uses_output_dir_from_settings(self, nfd_folder: Path, tmp_path: Path):
        s = Settings(_env_file=None, output_dir=tmp_path / "configured")
        summary = await normalize_files([nfd_folder], settings=s)
        assert Path(summary.written[0]).parent == tmp_path / "configured"
