# tests/conftest.py — v2
"""Shared test fixtures for unit and integration tests.

Decomposed names are written with explicit escapes so that the NFD/NFC
difference survives any editor.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from nfcname.batch.sources import InMemoryRawFile
from nfcname.config.settings import Settings

N_TILDE_NFD = "N\u0303"


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any .env, without artificial delays."""
    return Settings(
        _env_file=None,
        progress_yield_seconds=0.0,
        export_delay_seconds=0.0,
    )


@pytest.fixture
def folder_files() -> list[InMemoryRawFile]:
    """Folder selection of "a.txt" and "sub/b.txt" under a decomposed N-tilde."""
    return [
        InMemoryRawFile("a.txt", b"alpha", relative_path=f"{N_TILDE_NFD}/a.txt"),
        InMemoryRawFile("b.txt", b"beta" * 256, relative_path=f"{N_TILDE_NFD}/sub/b.txt"),
    ]


@pytest.fixture
def nfd_folder(tmp_path: Path) -> Path:
    """On-disk folder named with a decomposed N-tilde, with a nested file."""
    root = tmp_path / N_TILDE_NFD
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"alpha")
    (root / "sub" / "b.txt").write_bytes(b"beta" * 256)
    return root


@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary output directory."""
    out = tmp_path / "output"
    out.mkdir()
    return out
