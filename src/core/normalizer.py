# src/core/normalizer.py — v2
"""Single-segment Unicode normalizer.

Maps one path component (or a whole flat file name) to its composed form.
Pure and idempotent: normalize(normalize(s)) == normalize(s).
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Literal

from nfcname.errors import UnsupportedNormalizationError

logger = logging.getLogger(__name__)

NormalizationForm = Literal["NFC", "NFKC"]

DEFAULT_FORM: NormalizationForm = "NFC"

# "e" + COMBINING ACUTE ACCENT must compose to U+00E9.
_PROBE_DECOMPOSED = "e\u0301"
_PROBE_COMPOSED = "\u00e9"


def normalize(segment: str, form: NormalizationForm = DEFAULT_FORM) -> str:
    """Return ``segment`` in composed Unicode form.

    Empty or None input is returned as-is. Text that the normalization
    primitive rejects (e.g. unpaired surrogates on some builds) is passed
    through unchanged.
    """
    if not segment or is_normalized(segment, form):
        return segment
    try:
        return unicodedata.normalize(form, segment)
    except UnicodeError:
        logger.debug("Passing through unnormalizable segment %r", segment)
        return segment


def is_normalized(segment: str, form: NormalizationForm = DEFAULT_FORM) -> bool:
    """True if ``segment`` is already in the requested form."""
    if not segment:
        return True
    try:
        return unicodedata.is_normalized(form, segment)
    except UnicodeError:
        return True


def ensure_normalization_supported(form: NormalizationForm = DEFAULT_FORM) -> None:
    """Probe the normalization primitive once.

    Raises:
        UnsupportedNormalizationError: If composition does not work here.
    """
    try:
        probe = unicodedata.normalize(form, _PROBE_DECOMPOSED)
    except (AttributeError, ValueError) as exc:
        raise UnsupportedNormalizationError(
            f"Unicode normalization form {form!r} is unavailable: {exc}"
        ) from exc
    if probe != _PROBE_COMPOSED:
        raise UnsupportedNormalizationError(
            f"Unicode normalization form {form!r} did not compose {_PROBE_DECOMPOSED!r}"
        )
    logger.debug("Unicode %s normalization available (unidata %s)",
                 form, unicodedata.unidata_version)
