# src/errors.py — v1
"""Exception hierarchy.

Per-file failures (UnreadableContentError) are captured on the record and
never escape a batch. UnsupportedNormalizationError is fatal and raised once
at startup.
"""

from __future__ import annotations


class NfcNameError(Exception):
    """Base error for the project."""


class UnsupportedNormalizationError(NfcNameError):
    """Unicode normalization does not work in this interpreter."""


class UnreadableContentError(NfcNameError):
    """A file's bytes could not be retrieved."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path!r}: {reason}")
        self.path = path
        self.reason = reason


class NameCollisionError(NfcNameError):
    """Two records normalize to the same export name."""

    def __init__(self, name: str, first: str, second: str) -> None:
        super().__init__(
            f"{second!r} collides with {first!r} on export name {name!r}"
        )
        self.name = name
        self.first = first
        self.second = second
