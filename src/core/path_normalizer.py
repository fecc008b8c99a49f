# src/core/path_normalizer.py — v1
"""Path normalizer — per-segment normalization of "/"-separated paths.

Separators are never touched, so leading, trailing and empty segments keep
their positions and the segment count is preserved.
"""

from __future__ import annotations

from pydantic import BaseModel

from nfcname.core.normalizer import DEFAULT_FORM, NormalizationForm, normalize

SEPARATOR = "/"


class PathNormalization(BaseModel):
    """Result of normalizing one path."""

    normalized_path: str
    changed: bool


def normalize_path(
    path: str, form: NormalizationForm = DEFAULT_FORM,
) -> PathNormalization:
    """Normalize every segment of ``path`` independently.

    A path without separators is normalized as a whole.
    """
    segments = path.split(SEPARATOR)
    normalized = SEPARATOR.join(normalize(s, form) for s in segments)
    return PathNormalization(normalized_path=normalized, changed=normalized != path)


def leaf_name(path: str) -> str:
    """Return the last segment of ``path``."""
    return path.rsplit(SEPARATOR, 1)[-1]


def top_segment(path: str) -> str:
    """Return the first non-empty segment of ``path`` ("" if none)."""
    for segment in path.split(SEPARATOR):
        if segment:
            return segment
    return ""
