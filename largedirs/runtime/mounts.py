"""Non-local mount discovery used to keep scans off network filesystems.

Only consulted when scanning a filesystem root. Reads the kernel mount table
where one exists; other platforms report no extra mounts.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

PROC_MOUNTS = Path("/proc/mounts")

NETWORK_FS_TYPES = frozenset(
    {
        "nfs",
        "nfs4",
        "cifs",
        "smbfs",
        "smb3",
        "sshfs",
        "fuse.sshfs",
        "afpfs",
        "9p",
        "ceph",
        "glusterfs",
        "fuse.glusterfs",
        "davfs",
        "fuse.davfs2",
        "fuse.rclone",
        "fuse.s3fs",
        "lustre",
        "gpfs",
        "ncpfs",
        "afs",
    }
)

_OCTAL_ESCAPE_RE = re.compile(r"\\([0-7]{3})")


def decode_mount_field(raw: str) -> str:
    """Undo the kernel's octal escaping (``\\040`` for space, etc.)."""
    return _OCTAL_ESCAPE_RE.sub(lambda match: chr(int(match.group(1), 8)), raw)


def is_filesystem_root(path: str | Path) -> bool:
    text = os.path.abspath(os.fspath(path))
    return os.path.dirname(text) == text


def parse_mount_table(text: str) -> set[str]:
    """Return mount points whose filesystem type is a network type."""
    mounts: set[str] = set()
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 3:
            continue
        mount_point = decode_mount_field(fields[1])
        fs_type = fields[2].lower()
        if fs_type in NETWORK_FS_TYPES or fs_type.startswith("nfs"):
            mounts.add(mount_point)
    return mounts


def non_local_mounts(root: str | Path, mounts_file: Path = PROC_MOUNTS) -> set[str]:
    """Network mount points to exclude when ``root`` is a filesystem root."""
    if not is_filesystem_root(root):
        return set()
    try:
        text = mounts_file.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        logger.debug("mount table %s unavailable: %s", mounts_file, exc)
        return set()
    mounts = parse_mount_table(text)
    if mounts:
        logger.info("excluding %d network mount(s)", len(mounts))
    return mounts


__all__ = [
    "NETWORK_FS_TYPES",
    "decode_mount_field",
    "is_filesystem_root",
    "parse_mount_table",
    "non_local_mounts",
]
