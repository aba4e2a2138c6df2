"""Breadth-first directory-size traversal.

One thread reads the filesystem. Each dequeued path ends in exactly one of the
terminal states ``scanned``, ``skipped`` or ``duplicate`` and produces one
progress event. Only fully read directories enqueue their subdirectories.
"""

from __future__ import annotations

import logging
import os
import time
from collections import deque
from collections.abc import Callable
from pathlib import Path

from .cancel import CancellationToken
from .classify import classify
from .exclusion import ExclusionPolicy
from .identity import IdentityProber, default_identity_prober
from .types import (
    DUPLICATE,
    SKIPPED,
    DirectoryRecord,
    IdentityKey,
    ProgressEvent,
    ScanOptions,
    ScanResult,
)

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Base error for scans that cannot produce any result."""


class RootUnreadableError(ScanError):
    """The scan root is missing, not a directory, or cannot be listed."""

    def __init__(self, root: Path, error: OSError) -> None:
        super().__init__(f"cannot read {root}: {error.strerror or error}")
        self.root = root
        self.error = error


def _clear_own_fields(record: DirectoryRecord) -> None:
    record.own_size = 0
    record.own_file_count = 0
    record.own_type_sizes = {}
    record.own_oldest_mtime_ns = None
    record.own_newest_mtime_ns = None


def _read_directory(
    record: DirectoryRecord,
    slow_threshold: float,
    classify_types: bool,
    clock: Callable[[], float],
) -> tuple[list[Path], bool]:
    """Accumulate regular files of ``record.path`` into its own-level fields.

    Returns ``(subdirectories, finished)``. ``finished`` is false when the
    enumeration ran past ``slow_threshold``; sizes summed up to that point stay
    on the record. Listing failures propagate as ``OSError``.
    """
    subdirectories: list[Path] = []
    started = clock()
    with os.scandir(record.path) as entries:
        for entry in entries:
            if clock() - started > slow_threshold:
                return subdirectories, False
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirectories.append(Path(entry.path))
                    continue
                if not entry.is_file(follow_symlinks=False):
                    continue
                stat = entry.stat(follow_symlinks=False)
            except OSError:
                # Vanished or unreadable entry; the rest of the directory still counts.
                continue
            category = classify(entry.name) if classify_types else None
            record.add_file(int(stat.st_size), int(stat.st_mtime_ns), category)
    return subdirectories, True


def scan(
    root: str | Path,
    options: ScanOptions | None = None,
    cancel: CancellationToken | None = None,
    *,
    prober: IdentityProber | None = None,
    on_progress: Callable[[ProgressEvent], None] | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> ScanResult:
    """Walk ``root`` breadth-first and return per-directory own-level records.

    Cancellation is checked before each dequeue; when it fires the records
    gathered so far are returned with ``completed=False``. Cumulative fields
    are left for ``aggregate``.
    """
    options = options or ScanOptions()
    exclusions = options.exclusions if options.exclusions is not None else ExclusionPolicy()
    prober = prober or default_identity_prober()
    root_path = Path(os.path.abspath(os.fspath(root)))

    if not os.path.isdir(root_path):
        raise RootUnreadableError(
            root_path,
            NotADirectoryError(2, "not a directory or does not exist", str(root_path)),
        )

    queue: deque[Path] = deque([root_path])
    records: list[DirectoryRecord] = []
    seen: set[IdentityKey] = set()
    processed = 0
    accumulated = 0
    completed = True

    while queue:
        if cancel is not None and cancel.cancelled:
            completed = False
            break

        path = queue.popleft()
        record = DirectoryRecord(path=path)
        children: list[Path] = []

        if exclusions.is_excluded(path):
            record.status = SKIPPED
            logger.debug("excluded %s", path)
        else:
            key, supported = prober.identify(path)
            if supported and key in seen:
                record.status = DUPLICATE
                logger.debug("duplicate %s", path)
            else:
                if supported:
                    seen.add(key)
                try:
                    children, finished = _read_directory(
                        record,
                        options.slow_threshold,
                        options.classify_types,
                        clock,
                    )
                except OSError as exc:
                    if path == root_path:
                        raise RootUnreadableError(root_path, exc) from exc
                    logger.debug("cannot read %s: %s", path, exc)
                    _clear_own_fields(record)
                    record.status = SKIPPED
                else:
                    if not finished:
                        logger.debug("slow directory %s skipped after %.2fs", path, options.slow_threshold)
                        record.status = SKIPPED
                        children = []

        records.append(record)
        processed += 1
        accumulated += record.own_size
        if on_progress is not None:
            on_progress(
                ProgressEvent(
                    current_path=path,
                    directories_processed=processed,
                    bytes_accumulated=accumulated,
                )
            )
        queue.extend(children)

    return ScanResult(root=root_path, records=records, completed=completed)


__all__ = [
    "ScanError",
    "RootUnreadableError",
    "scan",
]
