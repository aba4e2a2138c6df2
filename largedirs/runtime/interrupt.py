"""Bridge from the interactive interrupt key to the scan's cancellation token."""

from __future__ import annotations

import contextlib
import signal
import threading
from collections.abc import Iterator

from ..scan.cancel import CancellationToken


@contextlib.contextmanager
def cancel_on_interrupt(cancel: CancellationToken) -> Iterator[CancellationToken]:
    """Route SIGINT to ``cancel`` for the duration of the block.

    The handler only sets the token; callers report the interruption once any
    progress line has been cleared. The previous handler is restored on exit.
    Outside the main thread signals cannot be installed and the block runs
    unchanged.
    """
    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return

    def handle_interrupt(_signum, _frame) -> None:
        cancel.cancel()

    previous = signal.signal(signal.SIGINT, handle_interrupt)
    try:
        yield cancel
    finally:
        signal.signal(signal.SIGINT, previous)


__all__ = ["cancel_on_interrupt"]
