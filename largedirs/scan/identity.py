"""Physical directory identity probing for duplicate detection.

A prober answers ``(key, supported)``. When ``supported`` is false the engine
bypasses the duplicate check for that path instead of guessing.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from .types import IdentityKey


class IdentityProber(Protocol):
    def identify(self, path: Path) -> tuple[IdentityKey | None, bool]:
        ...


class StatIdentityProber:
    """Device/inode identity from ``os.stat`` without following symlinks."""

    def identify(self, path: Path) -> tuple[IdentityKey | None, bool]:
        try:
            stat = os.stat(path, follow_symlinks=False)
        except OSError:
            return None, False
        # Some filesystems report no inode numbers at all.
        if not stat.st_ino:
            return None, False
        return IdentityKey(device=int(stat.st_dev), inode=int(stat.st_ino)), True


class NullIdentityProber:
    """Prober for platforms without a stable identity; dedup is bypassed."""

    def identify(self, path: Path) -> tuple[IdentityKey | None, bool]:
        return None, False


def default_identity_prober() -> IdentityProber:
    """Return the prober suited to the running platform."""
    if os.name in {"posix", "nt"}:
        return StatIdentityProber()
    return NullIdentityProber()


__all__ = [
    "IdentityProber",
    "StatIdentityProber",
    "NullIdentityProber",
    "default_identity_prober",
]
