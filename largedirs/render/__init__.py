"""Terminal presentation helpers: ANSI styling and the ranked size report."""

from __future__ import annotations

from .report import DiskUsage, format_delta, format_size, format_type_ratios, render_report, select_top

__all__ = [
    "DiskUsage",
    "format_delta",
    "format_size",
    "format_type_ratios",
    "render_report",
    "select_top",
]
