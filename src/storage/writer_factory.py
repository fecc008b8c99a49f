# src/storage/writer_factory.py — v3
"""Factory: instantiate output writer from configuration."""

from __future__ import annotations

from pathlib import Path

from nfcname.config.settings import Settings
from nfcname.storage.base_output_writer import BaseOutputWriter
from nfcname.storage.local_writer import LocalWriter


def create_writer(settings: Settings, output_dir: Path | None = None) -> BaseOutputWriter:
    """Create the output writer selected by OUTPUT_WRITER.

    Args:
        settings: Application settings.
        output_dir: Overrides OUTPUT_DIR (e.g. from the CLI).

    Raises:
        ValueError: If writer type is not supported.
    """
    if settings.output_writer == "local":
        return LocalWriter(output_dir or settings.output_dir)

    raise ValueError(f"Unsupported output writer: {settings.output_writer!r}")
