"""Database module for Blind Globe persistence."""

from blindglobe.db.models import Base, SessionSnapshot
from blindglobe.db.session import (
    create_db_engine,
    create_session_factory,
    create_tables,
    session_scope,
)

__all__ = [
    "Base",
    "SessionSnapshot",
    "create_db_engine",
    "create_session_factory",
    "create_tables",
    "session_scope",
]
