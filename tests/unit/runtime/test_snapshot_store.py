"""Tests for per-root growth snapshots."""

from __future__ import annotations

import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from largedirs.runtime.snapshot_store import SnapshotStore
from largedirs.scan import DUPLICATE, SKIPPED, DirectoryRecord


def _aggregated(path: str, total: int, status: str = "scanned") -> DirectoryRecord:
    return DirectoryRecord(path=Path(path), status=status, own_size=total, total_size=total)


class SnapshotStoreTests(unittest.TestCase):
    def test_save_then_load_returns_sizes_and_timestamp(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = SnapshotStore(Path(tmp) / "snapshots")
            root = Path("/data")
            now = datetime(2026, 3, 1, 12, 30, 5)
            records = [
                _aggregated("/data", 600),
                _aggregated("/data/slow", 50, SKIPPED),
                _aggregated("/data/twin", 0, DUPLICATE),
            ]

            self.assertTrue(store.save(root, records, now))
            snapshot = store.load(root)

        self.assertIsNotNone(snapshot)
        self.assertEqual(snapshot.timestamp, now)
        self.assertEqual(snapshot.sizes, {Path("/data"): 600, Path("/data/slow"): 50})
        self.assertEqual(snapshot.previous_size(Path("/data")), 600)
        self.assertIsNone(snapshot.previous_size(Path("/data/twin")))

    def test_written_file_uses_timestamp_and_entries_shape(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = SnapshotStore(Path(tmp))
            root = Path("/data")
            store.save(root, [_aggregated("/data", 1)], datetime(2026, 1, 2, 3, 4, 5))

            payload = json.loads(store.path_for(root).read_text(encoding="utf-8"))

        self.assertEqual(payload["timestamp"], "2026-01-02T03:04:05")
        self.assertEqual(payload["entries"], [{"path": "/data", "size": 1}])

    def test_roots_do_not_share_snapshot_files(self) -> None:
        store = SnapshotStore(Path("/unused"))
        self.assertNotEqual(store.path_for(Path("/a")), store.path_for(Path("/b")))

    def test_missing_or_malformed_snapshot_loads_as_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = SnapshotStore(Path(tmp))
            root = Path("/data")
            self.assertIsNone(store.load(root))

            store.path_for(root).write_text("{broken", encoding="utf-8")
            with self.assertLogs("largedirs.runtime.snapshot_store", level="WARNING"):
                self.assertIsNone(store.load(root))

            store.path_for(root).write_text(json.dumps({"entries": []}), encoding="utf-8")
            self.assertIsNone(store.load(root))

    def test_invalid_entries_are_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = SnapshotStore(Path(tmp))
            root = Path("/data")
            store.path_for(root).write_text(
                json.dumps(
                    {
                        "timestamp": "2026-01-01T00:00:00",
                        "entries": [
                            {"path": "/data/ok", "size": 5},
                            {"path": "/data/neg", "size": -1},
                            {"path": "/data/bool", "size": True},
                            {"path": 3, "size": 1},
                            "junk",
                        ],
                    }
                ),
                encoding="utf-8",
            )

            snapshot = store.load(root)

        self.assertEqual(snapshot.sizes, {Path("/data/ok"): 5})

    def test_save_failure_returns_false(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("x", encoding="utf-8")
            store = SnapshotStore(blocker / "snapshots")

            with self.assertLogs("largedirs.runtime.snapshot_store", level="WARNING"):
                self.assertFalse(store.save(Path("/data"), [_aggregated("/data", 1)], datetime(2026, 1, 1)))


if __name__ == "__main__":
    unittest.main()
