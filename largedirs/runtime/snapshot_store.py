"""Per-root JSON snapshots of directory totals for growth reporting.

Each scanned root gets its own file so scans of different trees never
overwrite each other's history. Reading and writing are best-effort.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from platformdirs import user_cache_dir

from ..scan.types import DUPLICATE, DirectoryRecord, Snapshot
from .config import APP_NAME

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_DIR = Path(user_cache_dir(APP_NAME, appauthor=False)) / "snapshots"


def _snapshot_filename(root: Path) -> str:
    digest = hashlib.sha1(str(root).encode("utf-8", "surrogateescape")).hexdigest()
    return f"{digest}.json"


def _parse_entries(raw_entries: object) -> dict[Path, int]:
    """Keep only ``{"path": str, "size": int>=0}`` entries."""
    sizes: dict[Path, int] = {}
    if not isinstance(raw_entries, list):
        return sizes
    for raw in raw_entries:
        if not isinstance(raw, dict):
            continue
        raw_path = raw.get("path")
        raw_size = raw.get("size")
        if not isinstance(raw_path, str) or not raw_path:
            continue
        if isinstance(raw_size, bool) or not isinstance(raw_size, int) or raw_size < 0:
            continue
        sizes[Path(raw_path)] = raw_size
    return sizes


class SnapshotStore:
    """Load and save the previous run's path-to-size map for one root."""

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory if directory is not None else DEFAULT_SNAPSHOT_DIR

    def path_for(self, root: Path) -> Path:
        return self.directory / _snapshot_filename(root)

    def load(self, root: Path) -> Snapshot | None:
        """Return the stored snapshot for ``root``, or ``None`` when unusable."""
        snapshot_path = self.path_for(root)
        try:
            data = json.loads(snapshot_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable snapshot %s: %s", snapshot_path, exc)
            return None
        if not isinstance(data, dict):
            return None
        raw_timestamp = data.get("timestamp")
        if not isinstance(raw_timestamp, str):
            return None
        try:
            timestamp = datetime.fromisoformat(raw_timestamp)
        except ValueError:
            logger.warning("ignoring snapshot %s with bad timestamp %r", snapshot_path, raw_timestamp)
            return None
        return Snapshot(timestamp=timestamp, sizes=_parse_entries(data.get("entries")))

    def save(self, root: Path, records: Iterable[DirectoryRecord], now: datetime) -> bool:
        """Write aggregated ``records`` as the new baseline; return success."""
        entries = [
            {"path": str(record.path), "size": int(record.total_size)}
            for record in records
            if record.status != DUPLICATE
        ]
        payload = {
            "timestamp": now.isoformat(timespec="seconds"),
            "root": str(root),
            "entries": entries,
        }
        snapshot_path = self.path_for(root)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            snapshot_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.warning("could not write snapshot %s: %s", snapshot_path, exc)
            return False
        logger.debug("saved %d snapshot entries to %s", len(entries), snapshot_path)
        return True


__all__ = [
    "DEFAULT_SNAPSHOT_DIR",
    "SnapshotStore",
]
