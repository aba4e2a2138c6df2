"""Command-line front door for largedirs.

Parses CLI options, merges them with persisted defaults, and runs one scan.
Progress goes to stderr; the ranked report goes to stdout.
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import shutil
import sys
from datetime import datetime
from pathlib import Path

from . import __version__
from .render.report import DiskUsage, render_report
from .runtime.config import ScanDefaults, load_scan_defaults, save_scan_defaults
from .runtime.interrupt import cancel_on_interrupt
from .runtime.mounts import non_local_mounts
from .runtime.progress import ProgressReporter
from .runtime.snapshot_store import SnapshotStore
from .scan import CancellationToken, ExclusionPolicy, RootUnreadableError, ScanOptions, aggregate, scan

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0, None: 1.0}


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def parse_duration(value: str) -> float:
    """argparse type for durations like ``500ms``, ``2s``, ``1.5`` or ``1m``."""
    match = _DURATION_RE.match(value)
    if match is None:
        raise argparse.ArgumentTypeError(f"invalid duration: {value!r}")
    seconds = float(match.group(1)) * _DURATION_UNITS[match.group(2)]
    if seconds <= 0:
        raise argparse.ArgumentTypeError("duration must be > 0")
    return seconds


def _default_root() -> Path:
    root = Path(os.sep)
    return root if root.exists() else Path(".")


def _disk_usage(root: Path) -> DiskUsage | None:
    try:
        usage = shutil.disk_usage(root)
    except OSError:
        return None
    return DiskUsage(total=usage.total, used=usage.used, free=usage.free)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="largedirs",
        description=(
            "Find the largest directories under a root. Scans breadth-first in one thread, "
            "shows live progress, and prints partial results if interrupted."
        ),
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to scan. Defaults to / (or . if / is missing).")
    parser.add_argument("--top", type=_positive_int, default=None, help="How many directories to list (default 15).")
    parser.add_argument(
        "--slow-threshold",
        type=parse_duration,
        default=None,
        help="Max time to enumerate one directory before skipping it, e.g. 2s or 500ms.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATH",
        help="Path prefix to skip (repeatable).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--no-file-types", action="store_true", help="Skip file-type composition.")
    parser.add_argument("--no-snapshot", action="store_true", help="Neither read nor write the growth snapshot.")
    parser.add_argument("--no-progress", action="store_true", help="Do not draw the live progress line.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --top/--slow-threshold/--exclude/--no-color/--no-file-types as new defaults.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped directories to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _effective_defaults(args: argparse.Namespace, saved: ScanDefaults) -> ScanDefaults:
    """Overlay explicit CLI flags on ``saved`` defaults."""
    return ScanDefaults(
        top=args.top if args.top is not None else saved.top,
        slow_threshold=args.slow_threshold if args.slow_threshold is not None else saved.slow_threshold,
        exclude=tuple(args.exclude) if args.exclude is not None else saved.exclude,
        no_color=args.no_color or saved.no_color,
        file_types=saved.file_types and not args.no_file_types,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, scan the target, and print the ranked report.

    Exits through ``SystemExit`` when the target is missing or unreadable.
    Interrupted scans still print an aggregated, clearly labeled partial list.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    settings = _effective_defaults(args, load_scan_defaults())
    if args.save_defaults:
        save_scan_defaults(settings)

    root = Path(os.path.abspath(args.path)) if args.path is not None else _default_root().absolute()
    if not root.exists():
        raise SystemExit(f"Path not found: {root}")

    color = not settings.no_color and sys.stdout.isatty()
    show_progress = not args.no_progress and sys.stderr.isatty()

    exclusions = ExclusionPolicy.build(settings.exclude).with_mounts(non_local_mounts(root))
    options = ScanOptions(
        exclusions=exclusions,
        slow_threshold=settings.slow_threshold,
        classify_types=settings.file_types,
    )

    store = None if args.no_snapshot else SnapshotStore()
    snapshot = store.load(root) if store is not None else None

    sys.stdout.write(f"Scanning '{root}'...\n\n")
    sys.stdout.flush()

    cancel = CancellationToken()
    reporter = ProgressReporter(sys.stderr, cancel, color=color) if show_progress else None
    with cancel_on_interrupt(cancel):
        if reporter is not None:
            reporter.start()
        try:
            result = scan(
                root,
                options,
                cancel,
                on_progress=reporter.publish if reporter is not None else None,
            )
        except RootUnreadableError as exc:
            raise SystemExit(f"Cannot scan {exc.root}: {exc.error.strerror or exc.error}") from exc
        finally:
            if reporter is not None:
                reporter.close()
                reporter.wait()

    if cancel.cancelled:
        sys.stderr.write("Interrupted. Finalizing...\n")
        sys.stderr.flush()

    aggregate(result.records)
    sys.stdout.write(
        render_report(
            result,
            settings.top,
            snapshot=snapshot,
            disk_usage=_disk_usage(result.root),
            color=color,
            show_types=settings.file_types,
        )
    )
    sys.stdout.flush()

    if store is not None and result.completed:
        store.save(result.root, result.records, datetime.now())
    elif store is not None:
        logger.info("partial scan; keeping previous snapshot")


if __name__ == "__main__":
    main()
