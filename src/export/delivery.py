# src/export/delivery.py — v2
"""Delivery — hand archives and single-file exports to an output writer.

Successive single-file writes are spaced by a small fixed delay, the way
a browser throttles a burst of downloads.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nfcname.export.models import ArchiveResult, ExportUnit
    from nfcname.storage.base_output_writer import BaseOutputWriter

logger = logging.getLogger(__name__)


async def deliver_archive(archive: ArchiveResult, writer: BaseOutputWriter) -> str:
    """Write the archive under its label; return the stored location."""
    if await writer.exists(archive.label):
        logger.warning("Replacing existing %s", archive.label)
    location = await writer.write(archive.label, archive.data)
    logger.info("Wrote %s (%d bytes)", location, len(archive.data))
    return location


async def deliver_units(
    units: Sequence[ExportUnit],
    writer: BaseOutputWriter,
    delay: float = 0.1,
) -> list[str]:
    """Write each unit once, pausing ``delay`` seconds between writes."""
    locations: list[str] = []
    for i, unit in enumerate(units):
        if i and delay:
            await asyncio.sleep(delay)
        if await writer.exists(unit.name):
            logger.warning("Replacing existing %s", unit.name)
        locations.append(await writer.write(unit.name, unit.data))
        logger.debug("Wrote %s", unit.name)
    logger.info("Wrote %d files", len(locations))
    return locations
