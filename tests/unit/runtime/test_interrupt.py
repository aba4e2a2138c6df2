"""Tests for routing SIGINT to a cancellation token."""

from __future__ import annotations

import signal
import threading
import unittest

from largedirs.runtime.interrupt import cancel_on_interrupt
from largedirs.scan import CancellationToken


class CancelOnInterruptTests(unittest.TestCase):
    def test_sigint_handler_sets_token_and_is_restored(self) -> None:
        previous = signal.getsignal(signal.SIGINT)
        cancel = CancellationToken()

        with cancel_on_interrupt(cancel):
            handler = signal.getsignal(signal.SIGINT)
            self.assertIsNot(handler, previous)
            handler(signal.SIGINT, None)
            handler(signal.SIGINT, None)

        self.assertTrue(cancel.cancelled)
        self.assertIs(signal.getsignal(signal.SIGINT), previous)

    def test_worker_thread_leaves_signals_alone(self) -> None:
        previous = signal.getsignal(signal.SIGINT)
        seen: list[object] = []

        def worker() -> None:
            with cancel_on_interrupt(CancellationToken()):
                seen.append(signal.getsignal(signal.SIGINT))

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join(timeout=2.0)

        self.assertEqual(seen, [previous])


if __name__ == "__main__":
    unittest.main()
