# src/export/base_exporter.py — v2
"""Abstract exporter — shared per-record export logic.

Every exporter can offer each record as an independent download
(export_each). Exporters that can also pack a folder-origin batch into a
single archive set ``supports_archive`` and implement build_archive.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Literal

from nfcname.core.path_normalizer import leaf_name
from nfcname.errors import NameCollisionError, UnreadableContentError
from nfcname.export.models import ArchiveResult, ExportResult, ExportUnit

if TYPE_CHECKING:
    from nfcname.batch.models import BatchResult, FileRecord

logger = logging.getLogger(__name__)

CollisionPolicy = Literal["suffix", "error"]


class NameAllocator:
    """Hand out unique export names according to a collision policy.

    The first record claiming a name keeps it. Later duplicates either get a
    " (n)" suffix before the extension or raise NameCollisionError.
    """

    def __init__(self, policy: CollisionPolicy = "suffix") -> None:
        self._policy = policy
        self._owners: dict[str, str] = {}

    def allocate(self, name: str, source_path: str) -> str:
        if name not in self._owners:
            self._owners[name] = source_path
            return name

        if self._policy == "error":
            raise NameCollisionError(name, self._owners[name], source_path)

        n = 2
        candidate = with_counter(name, n)
        while candidate in self._owners:
            n += 1
            candidate = with_counter(name, n)
        self._owners[candidate] = source_path
        logger.warning(
            "Name collision on %r: %s exported as %r", name, source_path, candidate,
        )
        return candidate


def with_counter(name: str, n: int) -> str:
    """Insert " (n)" before the extension of the last path segment."""
    head, sep, leaf = name.rpartition("/")
    stem, dot, ext = leaf.rpartition(".")
    if stem:
        leaf = f"{stem} ({n}){dot}{ext}"
    else:
        leaf = f"{leaf} ({n})"
    return f"{head}{sep}{leaf}"


class BaseExporter(ABC):
    """Unified interface for export strategies."""

    def __init__(self, collision_policy: CollisionPolicy = "suffix") -> None:
        self._collision_policy = collision_policy

    @property
    @abstractmethod
    def supports_archive(self) -> bool:
        """Whether build_archive is available."""

    @abstractmethod
    async def build_archive(self, batch: BatchResult) -> ArchiveResult:
        """Pack every available record of ``batch`` into one archive."""

    async def export_each(self, batch: BatchResult) -> ExportResult:
        """Offer every available record once, named by its normalized name."""
        result = ExportResult()
        async for record, name, data in self._payloads(batch, key="name"):
            if record is None:
                result.omitted += 1
                result.omitted_paths.append(name)
                continue
            result.units.append(
                ExportUnit(name=name, data=data, source_path=record.original_path)
            )

        if result.omitted:
            logger.warning("Export skipped %d unreadable files", result.omitted)
        logger.info("Prepared %d single-file exports", len(result.units))
        return result

    async def _payloads(
        self, batch: BatchResult, key: Literal["name", "path"],
    ) -> AsyncIterator[tuple[FileRecord | None, str, bytes]]:
        """Yield ``(record, export_name, bytes)`` in batch order.

        Omitted records are yielded as ``(None, original_path, b"")`` so that
        callers can count them.
        """
        allocator = NameAllocator(self._collision_policy)
        for record in batch.records:
            if not record.content_available or record.content is None:
                yield None, record.original_path, b""
                continue
            try:
                data = await record.content.read_bytes()
            except UnreadableContentError as exc:
                logger.warning("Omitting %s: %s", record.original_path, exc.reason)
                yield None, record.original_path, b""
                continue

            if key == "name":
                target = leaf_name(record.normalized_path)
            else:
                target = record.normalized_path
            yield record, allocator.allocate(target, record.original_path), data
