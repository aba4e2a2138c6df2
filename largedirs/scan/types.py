"""Domain datatypes for directory-size scanning."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .exclusion import ExclusionPolicy

SCANNED = "scanned"
SKIPPED = "skipped"
DUPLICATE = "duplicate"

DEFAULT_SLOW_THRESHOLD = 2.0


@dataclass(frozen=True)
class IdentityKey:
    """Physical identity of a directory (device id plus inode id)."""

    device: int
    inode: int


@dataclass
class DirectoryRecord:
    """One visited directory.

    ``own_*`` fields are written by the traversal engine and describe only the
    files directly inside ``path``. Cumulative fields are derived from them by
    ``aggregate`` and cover the whole scanned subtree.
    """

    path: Path
    status: str = SCANNED
    own_size: int = 0
    own_file_count: int = 0
    own_type_sizes: dict[str, int] = field(default_factory=dict)
    own_oldest_mtime_ns: int | None = None
    own_newest_mtime_ns: int | None = None
    total_size: int = 0
    file_count: int = 0
    type_sizes: dict[str, int] = field(default_factory=dict)
    oldest_mtime_ns: int | None = None
    newest_mtime_ns: int | None = None

    def add_file(self, size: int, mtime_ns: int | None, category: str | None) -> None:
        """Account one regular file in the own-level fields."""
        self.own_size += size
        self.own_file_count += 1
        if category is not None:
            self.own_type_sizes[category] = self.own_type_sizes.get(category, 0) + size
        if mtime_ns is None:
            return
        if self.own_oldest_mtime_ns is None or mtime_ns < self.own_oldest_mtime_ns:
            self.own_oldest_mtime_ns = mtime_ns
        if self.own_newest_mtime_ns is None or mtime_ns > self.own_newest_mtime_ns:
            self.own_newest_mtime_ns = mtime_ns


@dataclass(frozen=True)
class ProgressEvent:
    """Progress sample emitted each time a directory reaches a terminal state."""

    current_path: Path
    directories_processed: int
    bytes_accumulated: int


@dataclass(frozen=True)
class ScanOptions:
    """Knobs for one traversal.

    ``slow_threshold`` is the per-directory enumeration budget in seconds.
    """

    exclusions: ExclusionPolicy | None = None
    slow_threshold: float = DEFAULT_SLOW_THRESHOLD
    classify_types: bool = True


@dataclass(frozen=True)
class ScanResult:
    """Records in discovery order plus whether the traversal ran to the end."""

    root: Path
    records: list[DirectoryRecord]
    completed: bool


@dataclass(frozen=True)
class Snapshot:
    """Directory totals recorded by a previous run, used for growth deltas."""

    timestamp: datetime
    sizes: dict[Path, int]

    def previous_size(self, path: Path) -> int | None:
        return self.sizes.get(path)


__all__ = [
    "SCANNED",
    "SKIPPED",
    "DUPLICATE",
    "DEFAULT_SLOW_THRESHOLD",
    "IdentityKey",
    "DirectoryRecord",
    "ProgressEvent",
    "ScanOptions",
    "ScanResult",
    "Snapshot",
]
