"""Collaborators around a scan run.

This package groups the progress reporter thread, persisted defaults and
snapshots, network-mount discovery, and the interrupt-to-cancel bridge.
"""

from __future__ import annotations
