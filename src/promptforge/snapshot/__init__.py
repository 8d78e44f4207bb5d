"""Snapshot subsystem: immutable record snapshots, the swappable store
and the providers that load records into it."""
from __future__ import annotations

from promptforge.snapshot.providers import (
    BuiltinSnapshotProvider,
    FileSnapshotProvider,
    SnapshotProvider,
    SqliteSnapshotProvider,
)
from promptforge.snapshot.store import Snapshot, SnapshotStore, normalize_skill_name

__all__ = [
    "Snapshot",
    "SnapshotStore",
    "SnapshotProvider",
    "SqliteSnapshotProvider",
    "FileSnapshotProvider",
    "BuiltinSnapshotProvider",
    "normalize_skill_name",
]
