"""Session snapshot repository for data access."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from blindglobe.db.models import SessionSnapshot


class SnapshotRepository:
    """Pure data access for SessionSnapshot entities."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, player_id: str) -> SessionSnapshot | None:
        """Get the stored snapshot for a player."""
        result = self.session.execute(
            select(SessionSnapshot).where(SessionSnapshot.player_id == player_id)
        )
        return result.scalar_one_or_none()

    def save(self, player_id: str, payload: str) -> SessionSnapshot:
        """Create or replace a player's snapshot."""
        snapshot = self.get(player_id)
        if snapshot is None:
            snapshot = SessionSnapshot(player_id=player_id, payload=payload)
            self.session.add(snapshot)
        else:
            snapshot.payload = payload
        self.session.flush()
        return snapshot

    def delete(self, player_id: str) -> bool:
        """Delete a player's snapshot. Returns True if one existed."""
        snapshot = self.get(player_id)
        if snapshot is None:
            return False
        self.session.delete(snapshot)
        self.session.flush()
        return True
