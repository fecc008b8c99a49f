# src/main.py — v2
"""CLI entry point — preview, export, name commands.

Usage:
    nfcname preview <paths...>
    nfcname export <paths...> [-o DIR] [--no-archive] [--store]
    nfcname name <text...> [--escape]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from nfcname.errors import UnsupportedNormalizationError
from nfcname.version import __version__

if TYPE_CHECKING:
    from nfcname.config.settings import Settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNSUPPORTED = 2
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    try:
        settings = _load_settings(args)
        _setup_logging(settings, args.verbose)

        from nfcname.core.normalizer import ensure_normalization_supported

        ensure_normalization_supported(settings.normalization_form)
        return asyncio.run(args.func(args, settings))
    except UnsupportedNormalizationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_UNSUPPORTED
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="nfcname",
        description=f"nfcname v{__version__} - normalize NFD file names to NFC",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--form", choices=["NFC", "NFKC"], default=None,
        help="Normalization form (default: from settings, NFC)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- preview ---
    p_preview = subparsers.add_parser(
        "preview", help="Show original and normalized names",
    )
    p_preview.add_argument(
        "paths", nargs="+", type=Path,
        help="Files, or a single folder",
    )
    p_preview.add_argument(
        "--changed-only", action="store_true",
        help="List only files whose name changes",
    )
    p_preview.set_defaults(func=_cmd_preview)

    # --- export ---
    p_export = subparsers.add_parser(
        "export", help="Write renamed copies (a ZIP for folders)",
    )
    p_export.add_argument(
        "paths", nargs="+", type=Path,
        help="Files, or a single folder",
    )
    p_export.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output directory (default: OUTPUT_DIR, ./output)",
    )
    p_export.add_argument(
        "--no-archive", action="store_true",
        help="Write folder contents as individual files instead of a ZIP",
    )
    p_export.add_argument(
        "--store", action="store_true",
        help="Store archive entries without compression",
    )
    p_export.set_defaults(func=_cmd_export)

    # --- name ---
    p_name = subparsers.add_parser(
        "name", help="Normalize names given on the command line",
    )
    p_name.add_argument("names", nargs="+", help="Names or relative paths")
    p_name.add_argument(
        "--escape", action="store_true",
        help="Print names with non-ASCII characters escaped",
    )
    p_name.set_defaults(func=_cmd_name)

    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    """Load settings and apply CLI overrides."""
    from nfcname.config.settings import load_settings

    overrides: dict[str, object] = {}
    if args.form:
        overrides["normalization_form"] = args.form
    if getattr(args, "no_archive", False):
        overrides["archive_enabled"] = False
    if getattr(args, "store", False):
        overrides["archive_compression"] = "store"
    return load_settings(**overrides)


async def _cmd_preview(args: argparse.Namespace, settings: Settings) -> int:
    """List the before/after mapping."""
    from nfcname.api.facade import preview
    from nfcname.utils.formatting import describe_record

    missing = [p for p in args.paths if not p.exists()]
    if missing:
        logger.error("Not found: %s", ", ".join(str(p) for p in missing))
        return EXIT_ERROR

    batch = await preview(args.paths, settings=settings, on_progress=_print_progress)

    if batch.folder:
        print(f"\nFolder: {batch.folder.folder_name}")
    for record in batch.records:
        if args.changed_only and not record.changed:
            continue
        print(f"\nOriginal:   {record.original_path}")
        print(f"Normalized: {record.normalized_path}")
        print(f"            {describe_record(record)}")

    print(f"\n{len(batch)} files, {batch.changed_count} to normalize,"
          f" {batch.unavailable_count} unreadable")
    return EXIT_OK


async def _cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    """Normalize and write renamed copies."""
    from nfcname.api.facade import normalize_files

    missing = [p for p in args.paths if not p.exists()]
    if missing:
        logger.error("Not found: %s", ", ".join(str(p) for p in missing))
        return EXIT_ERROR

    summary = await normalize_files(
        args.paths, output_dir=args.output, settings=settings,
        on_progress=_print_progress,
    )

    print(f"\nExport complete:")
    print(f"  Files:       {summary.total_files}")
    print(f"  Normalized:  {summary.changed}")
    print(f"  Written:     {len(summary.written)}")
    if summary.archive_label:
        print(f"  Archive:     {summary.written[0]}")
    if summary.omitted:
        print(f"  Omitted:     {summary.omitted} (unreadable)")
        for path in summary.omitted_paths:
            print(f"    - {path}")
    return EXIT_OK


async def _cmd_name(args: argparse.Namespace, settings: Settings) -> int:
    """Print the normalized form of each argument."""
    from nfcname.core.path_normalizer import normalize_path

    for name in args.names:
        result = normalize_path(name, settings.normalization_form)
        shown = ascii(result.normalized_path) if args.escape else result.normalized_path
        marker = "*" if result.changed else " "
        print(f"{marker} {shown}")
    return EXIT_OK


def _print_progress(done: int, total: int) -> None:
    end = "\n" if done == total else "\r"
    print(f"Processing {done} / {total} files...", end=end, file=sys.stderr)


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from nfcname.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
