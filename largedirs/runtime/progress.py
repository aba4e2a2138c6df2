"""Background progress line fed by scan events."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from queue import Empty, Queue
from typing import TextIO

from ..render.ansi import BOLD, CLEAR_LINE, CYAN, GREEN, YELLOW, pad_right, shorten_path, style
from ..render.report import format_size
from ..scan.cancel import CancellationToken
from ..scan.types import ProgressEvent

DEFAULT_INTERVAL = 0.3
PATH_COLUMNS = 40

_CLOSED = object()


def format_progress_line(event: ProgressEvent, color: bool = True) -> str:
    """Render one status line for ``event``."""
    short_path = pad_right(shorten_path(str(event.current_path), PATH_COLUMNS), PATH_COLUMNS)
    return (
        f"{style('Scanning:', CYAN, color)} {style(short_path, BOLD, color)}"
        f" | {style('Dirs:', YELLOW, color)} {event.directories_processed}"
        f" | {style('Size:', GREEN, color)} {format_size(event.bytes_accumulated)}"
    )


class ProgressReporter:
    """Latest-event-wins progress renderer on its own daemon thread.

    The traversal thread calls ``publish`` for every event; the reporter only
    draws the newest one on each tick, so rendering cost does not depend on
    scan throughput. It stops when ``close`` is called or ``cancel`` fires,
    clears its line, and then marks itself done.
    """

    def __init__(
        self,
        stream: TextIO,
        cancel: CancellationToken | None = None,
        *,
        interval: float = DEFAULT_INTERVAL,
        color: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._stream = stream
        self._cancel = cancel
        self._interval = interval
        self._color = color
        self._clock = clock
        self._events: Queue[object] = Queue()
        self._done = threading.Event()
        self._latest: ProgressEvent | None = None
        self._thread: threading.Thread | None = None

    @property
    def latest(self) -> ProgressEvent | None:
        return self._latest

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._worker,
            name="largedirs-progress",
            daemon=True,
        )
        self._thread.start()

    def publish(self, event: ProgressEvent) -> None:
        """Hand ``event`` to the reporter without blocking the caller."""
        self._events.put(event)

    def close(self) -> None:
        """Signal that no more events will arrive."""
        self._events.put(_CLOSED)

    def wait(self, timeout: float | None = None) -> bool:
        """Wait until the reporter cleared its line and exited."""
        return self._done.wait(timeout)

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()

    def _worker(self) -> None:
        next_tick = self._clock() + self._interval
        try:
            while True:
                if self._cancel is not None and self._cancel.cancelled:
                    return
                remaining = max(0.0, next_tick - self._clock())
                try:
                    item = self._events.get(timeout=remaining)
                except Empty:
                    item = None
                if item is _CLOSED:
                    return
                if isinstance(item, ProgressEvent):
                    self._latest = item

                now = self._clock()
                if now < next_tick:
                    continue
                next_tick = now + self._interval
                if self._latest is not None:
                    self._write(CLEAR_LINE + format_progress_line(self._latest, self._color))
        finally:
            self._write(CLEAR_LINE)
            self._done.set()


__all__ = [
    "DEFAULT_INTERVAL",
    "format_progress_line",
    "ProgressReporter",
]
