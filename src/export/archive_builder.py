# src/export/archive_builder.py — v2
"""ZIP archive builder for folder-origin batches.

Entries are keyed by the normalized path (nested folders kept exactly as
the path segments say) and carry the original, unmodified bytes. The
archive is a standard ZIP container: local headers, central directory and
end-of-central-directory record. zipfile sets the UTF-8 name flag for
non-ASCII entry names. Names that cannot be encoded as UTF-8 (undecodable
bytes from the filesystem) are omitted like unreadable content.
"""

from __future__ import annotations

import io
import logging
import time
import zipfile
from typing import TYPE_CHECKING, Literal

from nfcname.export.base_exporter import BaseExporter, CollisionPolicy
from nfcname.export.models import ArchiveResult

if TYPE_CHECKING:
    from nfcname.batch.models import BatchResult

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "normalized"

_COMPRESSION = {
    "deflate": zipfile.ZIP_DEFLATED,
    "store": zipfile.ZIP_STORED,
}


class ZipArchiveBuilder(BaseExporter):
    """Pack batches into an in-memory ZIP archive."""

    def __init__(
        self,
        compression: Literal["deflate", "store"] = "deflate",
        compression_level: int = 6,
        extension: str = ".zip",
        collision_policy: CollisionPolicy = "suffix",
    ) -> None:
        super().__init__(collision_policy=collision_policy)
        self._compression = _COMPRESSION[compression]
        self._level = compression_level if compression == "deflate" else None
        self._extension = extension

    @property
    def supports_archive(self) -> bool:
        return True

    def archive_label(self, batch: BatchResult) -> str:
        """Normalized folder name plus archive extension."""
        folder = batch.folder.folder_name if batch.folder else ""
        return f"{folder or DEFAULT_LABEL}{self._extension}"

    async def build_archive(self, batch: BatchResult) -> ArchiveResult:
        """Build one archive entry per available record, in batch order."""
        label = self.archive_label(batch)
        date_time = time.localtime()[:6]
        entry_names: list[str] = []
        omitted_paths: list[str] = []

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=self._compression) as zf:
            async for record, name, data in self._payloads(batch, key="path"):
                if record is None:
                    omitted_paths.append(name)
                    continue
                try:
                    name.encode("utf-8")
                except UnicodeEncodeError:
                    # Undecodable on-disk names survive as lone surrogates.
                    logger.warning(
                        "Omitting %r: entry name is not valid UTF-8", record.original_path,
                    )
                    omitted_paths.append(record.original_path)
                    continue
                info = zipfile.ZipInfo(name, date_time=date_time)
                info.compress_type = self._compression
                info.external_attr = 0o644 << 16
                zf.writestr(info, data, compresslevel=self._level)
                entry_names.append(name)

        if omitted_paths:
            logger.warning(
                "Archive %s omits %d files", label, len(omitted_paths),
            )
        logger.info("Built archive %s with %d entries", label, len(entry_names))
        return ArchiveResult(
            label=label,
            data=buffer.getvalue(),
            entry_names=entry_names,
            omitted=len(omitted_paths),
            omitted_paths=omitted_paths,
        )
