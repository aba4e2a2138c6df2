"""Exclusion rules deciding which directories are never entered.

Checks are pure string operations on the path; no I/O happens here so the
traversal engine can consult the policy before touching the filesystem.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

PSEUDO_DIRECTORY_NAMES = frozenset({"proc", "sys", "dev", "run", "tmp", "var"})


def _normalize(raw_path: str | Path) -> str:
    return os.path.abspath(os.fspath(raw_path))


def _normalize_prefix(raw_prefix: str | Path) -> str:
    """Normalize a user prefix, keeping a trailing separator the user typed."""
    text = os.fspath(raw_prefix)
    normalized = _normalize(text)
    if text.endswith(("/", os.sep)) and not normalized.endswith(os.sep):
        normalized += os.sep
    return normalized


def _is_within(path: str, prefix: str) -> bool:
    """Return whether ``path`` is ``prefix`` or lies below it."""
    if path == prefix:
        return True
    if not prefix.endswith(os.sep):
        prefix = prefix + os.sep
    return path.startswith(prefix)


@dataclass(frozen=True)
class ExclusionPolicy:
    """User prefixes, built-in pseudo-directory names and non-local mounts."""

    prefixes: tuple[str, ...] = ()
    mounts: frozenset[str] = frozenset()
    builtin_names: frozenset[str] = PSEUDO_DIRECTORY_NAMES

    @classmethod
    def build(
        cls,
        prefixes: Iterable[str | Path] = (),
        mounts: Iterable[str | Path] = (),
    ) -> "ExclusionPolicy":
        """Create a policy with normalized prefixes and mount points."""
        return cls(
            prefixes=tuple(_normalize_prefix(prefix) for prefix in prefixes if str(prefix)),
            mounts=frozenset(_normalize(mount) for mount in mounts if str(mount)),
        )

    def with_mounts(self, mounts: Iterable[str | Path]) -> "ExclusionPolicy":
        """Return a copy that also excludes ``mounts``."""
        merged = set(self.mounts)
        merged.update(_normalize(mount) for mount in mounts if str(mount))
        return ExclusionPolicy(
            prefixes=self.prefixes,
            mounts=frozenset(merged),
            builtin_names=self.builtin_names,
        )

    def is_excluded(self, path: str | Path) -> bool:
        text = os.fspath(path)
        for prefix in self.prefixes:
            if text.startswith(prefix):
                return True
        for mount in self.mounts:
            if _is_within(text, mount):
                return True
        return os.path.basename(text).lower() in self.builtin_names


__all__ = [
    "PSEUDO_DIRECTORY_NAMES",
    "ExclusionPolicy",
]
