"""SQLAlchemy models for Blind Globe."""

from datetime import UTC, datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class SessionSnapshot(Base):
    """Persisted game session and lifetime stats for one player.

    The payload is a JSON blob so that the stored shape can follow the
    session without schema migrations.
    """

    __tablename__ = "session_snapshots"

    player_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, default="{}")
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC)
    )

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "payload": self.payload,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
