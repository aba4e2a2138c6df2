"""Directory-size scanning core.

This package contains the non-UI pieces of a scan:
- record/event datatypes and scan options
- exclusion, identity and content-category rules
- the breadth-first traversal engine
- the bottom-up size aggregator
"""

from __future__ import annotations

from .aggregate import aggregate
from .cancel import CancellationToken
from .classify import CATEGORIES, OTHER, classify
from .engine import RootUnreadableError, ScanError, scan
from .exclusion import PSEUDO_DIRECTORY_NAMES, ExclusionPolicy
from .identity import IdentityProber, NullIdentityProber, StatIdentityProber, default_identity_prober
from .types import (
    DEFAULT_SLOW_THRESHOLD,
    DUPLICATE,
    SCANNED,
    SKIPPED,
    DirectoryRecord,
    IdentityKey,
    ProgressEvent,
    ScanOptions,
    ScanResult,
    Snapshot,
)

__all__ = [
    "aggregate",
    "CancellationToken",
    "CATEGORIES",
    "OTHER",
    "classify",
    "ScanError",
    "RootUnreadableError",
    "scan",
    "PSEUDO_DIRECTORY_NAMES",
    "ExclusionPolicy",
    "IdentityProber",
    "NullIdentityProber",
    "StatIdentityProber",
    "default_identity_prober",
    "DEFAULT_SLOW_THRESHOLD",
    "DUPLICATE",
    "SCANNED",
    "SKIPPED",
    "DirectoryRecord",
    "IdentityKey",
    "ProgressEvent",
    "ScanOptions",
    "ScanResult",
    "Snapshot",
]
