"""Top-N selection and text report for aggregated scan results.

Formatting helpers here are presentation-only and side-effect free; the CLI
decides where the returned text goes.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import NamedTuple

from ..scan.types import DUPLICATE, SKIPPED, DirectoryRecord, ScanResult, Snapshot
from .ansi import BOLD, CYAN, GREEN, RED, YELLOW, pad_right, style

SIZE_COLUMN = 12
DELTA_COLUMN = 12
INDENT = " " * SIZE_COLUMN


class DiskUsage(NamedTuple):
    total: int
    used: int
    free: int


def format_size(size: int) -> str:
    """Human-readable size: GB/MB with two decimals, smaller sizes in whole KB."""
    if size >= 1 << 30:
        return f"{size / (1 << 30):.2f} GB"
    if size >= 1 << 20:
        return f"{size / (1 << 20):.2f} MB"
    return f"{size // (1 << 10)} KB"


def format_delta(current: int, previous: int | None) -> str:
    """Describe growth since the previous run (``new`` when never seen)."""
    if previous is None:
        return "new"
    diff = current - previous
    if diff == 0:
        return "="
    sign = "+" if diff > 0 else "-"
    return f"{sign}{format_size(abs(diff))}"


def format_type_ratios(type_sizes: dict[str, int], total_size: int, color: bool = True) -> str:
    """List categories as ``"20.00% Image, 80.00% Other"``, largest first."""
    if total_size <= 0:
        return "No files"
    pairs = sorted(
        ((category, size) for category, size in type_sizes.items() if size > 0),
        key=lambda item: (-item[1], item[0]),
    )
    parts = [
        f"{style(f'{size / total_size * 100:.2f}%', GREEN, color)} {category}"
        for category, size in pairs
    ]
    return ", ".join(parts)


def format_mtime_ns(mtime_ns: int | None) -> str:
    if mtime_ns is None:
        return "unknown"
    return datetime.fromtimestamp(mtime_ns / 1_000_000_000).strftime("%Y-%m-%d")


def select_top(records: Iterable[DirectoryRecord], limit: int) -> list[DirectoryRecord]:
    """Largest directories by ``total_size``; duplicates never rank."""
    candidates = [record for record in records if record.status != DUPLICATE]
    candidates.sort(key=lambda record: (-record.total_size, str(record.path)))
    return candidates[: max(0, limit)]


def _delta_cell(record: DirectoryRecord, snapshot: Snapshot, color: bool) -> str:
    delta = format_delta(record.total_size, snapshot.previous_size(record.path))
    if delta.startswith("+"):
        code = RED
    elif delta.startswith("-"):
        code = GREEN
    else:
        code = YELLOW
    return pad_right(style(delta, code, color), DELTA_COLUMN)


def render_report(
    result: ScanResult,
    limit: int,
    *,
    snapshot: Snapshot | None = None,
    disk_usage: DiskUsage | None = None,
    color: bool = True,
    show_types: bool = True,
) -> str:
    """Build the final ranked listing for an aggregated ``result``."""
    lines: list[str] = []
    header = f"Top {limit} largest directories in '{result.root}':"
    if not result.completed:
        header += " " + style("(partial results, scan interrupted)", YELLOW, color)
    lines.append(header)
    if snapshot is not None:
        stamp = snapshot.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        lines.append(f"Compared with previous scan from {stamp}")
    lines.append("")

    indent = INDENT + (" " * DELTA_COLUMN if snapshot is not None else "")
    for record in select_top(result.records, limit):
        row = pad_right(format_size(record.total_size), SIZE_COLUMN)
        if snapshot is not None:
            row += _delta_cell(record, snapshot, color)
        row += style(str(record.path), BOLD, color)
        if record.status == SKIPPED:
            row += " (skipped)"
        lines.append(row)
        if show_types and record.type_sizes:
            ratios = format_type_ratios(record.type_sizes, record.total_size, color)
            lines.append(f"{indent} -> File types: {ratios}")
        if record.file_count:
            span = f"{format_mtime_ns(record.oldest_mtime_ns)} .. {format_mtime_ns(record.newest_mtime_ns)}"
            lines.append(f"{indent} -> {record.file_count} files, modified {span}")

    if disk_usage is not None and disk_usage.total > 0:
        lines.append("")
        percent = disk_usage.used / disk_usage.total * 100
        lines.append(
            f"{style('Disk:', CYAN, color)} {format_size(disk_usage.used)} used of "
            f"{format_size(disk_usage.total)} ({percent:.1f}%), {format_size(disk_usage.free)} free"
        )
    return "\n".join(lines) + "\n"


__all__ = [
    "DiskUsage",
    "format_size",
    "format_delta",
    "format_type_ratios",
    "format_mtime_ns",
    "select_top",
    "render_report",
]
