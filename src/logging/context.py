# src/logging/context.py — v2
"""Contextual logging support — attach batch_id and stage to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per submitted batch; copied into asyncio tasks automatically.
_batch_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "batch_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    batch_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(batch_id=_batch_id.get(), stage=_stage.get())


def set_batch_context(batch_id: str, stage: str | None = None) -> None:
    """Set batch-level context (called once per submission)."""
    _batch_id.set(batch_id)
    _stage.set(stage)


def set_stage(stage: str | None) -> None:
    """Set the pipeline stage ("ingest", "archive", "export", ...)."""
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _batch_id.set(None)
    _stage.set(None)
