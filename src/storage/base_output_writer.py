# src/storage/base_output_writer.py — v3
"""Abstract output writer interface for exported files and archives."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseOutputWriter(ABC):
    """Unified interface for output storage backends."""

    @abstractmethod
    async def write(self, path: str, content: bytes) -> str:
        """Write bytes to ``path``; return where they were stored."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if path exists."""
