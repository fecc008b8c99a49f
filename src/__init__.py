# src/__init__.py — v1
"""nfcname: normalize decomposed Unicode file names and repack them."""

from nfcname.version import __version__

__all__ = ["__version__"]
