"""Cooperative cancellation shared between the scan and its interrupt sources."""

from __future__ import annotations

import threading


class CancellationToken:
    """One-way flag; any source (signal handler, timer, caller) may set it."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


__all__ = ["CancellationToken"]
