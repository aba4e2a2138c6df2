"""Bottom-up rollup of own-level directory stats into subtree totals."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .types import DUPLICATE, DirectoryRecord


def _reset_cumulative(record: DirectoryRecord) -> None:
    if record.status == DUPLICATE:
        record.total_size = 0
        record.file_count = 0
        record.type_sizes = {}
        record.oldest_mtime_ns = None
        record.newest_mtime_ns = None
        return
    record.total_size = record.own_size
    record.file_count = record.own_file_count
    record.type_sizes = dict(record.own_type_sizes)
    record.oldest_mtime_ns = record.own_oldest_mtime_ns
    record.newest_mtime_ns = record.own_newest_mtime_ns


def _merge_into(parent: DirectoryRecord, child: DirectoryRecord) -> None:
    parent.total_size += child.total_size
    parent.file_count += child.file_count
    for category, size in child.type_sizes.items():
        parent.type_sizes[category] = parent.type_sizes.get(category, 0) + size
    if child.oldest_mtime_ns is not None and (
        parent.oldest_mtime_ns is None or child.oldest_mtime_ns < parent.oldest_mtime_ns
    ):
        parent.oldest_mtime_ns = child.oldest_mtime_ns
    if child.newest_mtime_ns is not None and (
        parent.newest_mtime_ns is None or child.newest_mtime_ns > parent.newest_mtime_ns
    ):
        parent.newest_mtime_ns = child.newest_mtime_ns


def aggregate(records: Iterable[DirectoryRecord]) -> list[DirectoryRecord]:
    """Fill cumulative fields of ``records`` and return them in input order.

    Cumulative values are always rebuilt from the own-level fields, so calling
    this again on an aggregated list yields the same totals. Duplicates roll up
    as zero. Records whose parent is not in the set (the scan root, or a parent
    lost to cancellation) simply keep their own subtree totals.
    """
    ordered = list(records)
    by_path: dict[Path, DirectoryRecord] = {}
    for record in ordered:
        _reset_cumulative(record)
        by_path[record.path] = record

    for record in sorted(ordered, key=lambda item: len(item.path.parts), reverse=True):
        parent_path = record.path.parent
        if parent_path == record.path:
            continue
        parent = by_path.get(parent_path)
        if parent is None:
            continue
        _merge_into(parent, record)
    return ordered


__all__ = ["aggregate"]
