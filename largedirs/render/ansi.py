"""ANSI styling and width-aware truncation for terminal output.

Escape sequences are only emitted when a caller asks for color, so piped
output stays plain text.
"""

from __future__ import annotations

import re
import unicodedata

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"

CLEAR_LINE = "\r\033[K"

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def style(text: str, code: str, enabled: bool = True) -> str:
    """Wrap ``text`` in ``code`` ... reset when ``enabled``."""
    if not enabled or not code:
        return text
    return f"{code}{text}{RESET}"


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str) -> int:
    """Terminal columns used by one character (wide glyphs take two)."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def shorten_path(path: str, max_cols: int) -> str:
    """Clip ``path`` to ``max_cols`` display columns, ending with ``...``."""
    if display_width(path) <= max_cols:
        return path
    if max_cols <= 3:
        return "." * max(0, max_cols)
    budget = max_cols - 3
    out: list[str] = []
    col = 0
    for ch in path:
        w = char_display_width(ch)
        if col + w > budget:
            break
        out.append(ch)
        col += w
    return "".join(out) + "..."


def pad_right(text: str, width: int) -> str:
    """Left-align ``text`` in ``width`` columns, ignoring escape sequences."""
    return text + " " * max(0, width - display_width(text))


__all__ = [
    "RESET",
    "BOLD",
    "RED",
    "GREEN",
    "YELLOW",
    "CYAN",
    "CLEAR_LINE",
    "style",
    "strip_ansi",
    "char_display_width",
    "display_width",
    "shorten_path",
    "pad_right",
]
