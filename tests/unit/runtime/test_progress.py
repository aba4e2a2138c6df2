"""Tests for the background progress reporter."""

from __future__ import annotations

import io
import threading
import time
import unittest
from pathlib import Path

from largedirs.render.ansi import CLEAR_LINE
from largedirs.runtime.progress import ProgressReporter, format_progress_line
from largedirs.scan import CancellationToken, ProgressEvent


class _LockedStream(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()

    def write(self, text: str) -> int:
        with self._lock:
            return super().write(text)


def _event(index: int) -> ProgressEvent:
    return ProgressEvent(current_path=Path(f"/data/dir{index}"), directories_processed=index, bytes_accumulated=index * 1024)


class ProgressReporterTests(unittest.TestCase):
    def test_close_finishes_with_cleared_line(self) -> None:
        stream = _LockedStream()
        reporter = ProgressReporter(stream, interval=60.0, color=False)
        reporter.start()
        reporter.close()

        self.assertTrue(reporter.wait(timeout=2.0))
        self.assertTrue(stream.getvalue().endswith(CLEAR_LINE))

    def test_keeps_only_latest_event_between_ticks(self) -> None:
        stream = _LockedStream()
        reporter = ProgressReporter(stream, interval=60.0, color=False)
        for index in range(1, 101):
            reporter.publish(_event(index))
        reporter.start()
        reporter.close()

        self.assertTrue(reporter.wait(timeout=2.0))
        self.assertEqual(reporter.latest, _event(100))
        self.assertNotIn("dir1 ", stream.getvalue())

    def test_renders_latest_event_on_tick(self) -> None:
        stream = _LockedStream()
        reporter = ProgressReporter(stream, interval=0.01, color=False)
        reporter.start()
        reporter.publish(_event(1))
        reporter.publish(_event(7))

        deadline = time.monotonic() + 2.0
        while "/data/dir7" not in stream.getvalue() and time.monotonic() < deadline:
            time.sleep(0.01)
        reporter.close()

        self.assertTrue(reporter.wait(timeout=2.0))
        self.assertIn("Dirs: 7", stream.getvalue())

    def test_cancellation_stops_reporter_without_close(self) -> None:
        stream = _LockedStream()
        cancel = CancellationToken()
        reporter = ProgressReporter(stream, cancel, interval=0.01, color=False)
        reporter.start()
        cancel.cancel()

        self.assertTrue(reporter.wait(timeout=2.0))
        self.assertTrue(stream.getvalue().endswith(CLEAR_LINE))

    def test_format_progress_line_without_color(self) -> None:
        line = format_progress_line(
            ProgressEvent(current_path=Path("/srv/data"), directories_processed=12, bytes_accumulated=3 * 1024 * 1024),
            color=False,
        )

        self.assertTrue(line.startswith("Scanning: /srv/data"))
        self.assertIn("| Dirs: 12 |", line)
        self.assertTrue(line.endswith("Size: 3.00 MB"))
        self.assertNotIn("\033", line)


if __name__ == "__main__":
    unittest.main()
