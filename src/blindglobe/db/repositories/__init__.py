"""Repository layer for data access."""

from blindglobe.db.repositories.snapshot import SnapshotRepository

__all__ = ["SnapshotRepository"]
