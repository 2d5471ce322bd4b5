"""Game service for loading and saving player sessions."""

import json
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blindglobe.core.result import Result
from blindglobe.db.repositories import SnapshotRepository
from blindglobe.game.daily_seed import DailySeedGenerator
from blindglobe.game.session import GameSession

logger = logging.getLogger(__name__)


class GameService:
    """Business logic for session persistence.

    Storage is best-effort: a missing or unreadable snapshot yields a fresh
    session, and write failures are reported but never break play.
    """

    def __init__(self, session: Session, generator: DailySeedGenerator):
        self.session = session
        self.generator = generator
        self.snapshot_repo = SnapshotRepository(session)

    def load(self, player_id: str) -> Result[GameSession]:
        """Load a player's session, falling back to fresh-install defaults."""
        try:
            snapshot = self.snapshot_repo.get(player_id)
        except SQLAlchemyError as e:
            logger.error(f"[{player_id}] Failed to read snapshot: {e}")
            return Result.err("Failed to read saved game")

        if snapshot is None:
            logger.info(f"[{player_id}] No saved game, starting fresh")
            return Result.ok(GameSession(self.generator))

        try:
            game = GameSession.from_dict(json.loads(snapshot.payload), self.generator)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"[{player_id}] Discarding corrupt saved game: {type(e).__name__}: {e}")
            return Result.ok(GameSession(self.generator))

        logger.debug(f"[{player_id}] Saved game loaded: state={game.game_state.value}")
        return Result.ok(game)

    def save(self, player_id: str, game: GameSession) -> Result[GameSession]:
        """Write a player's session snapshot."""
        try:
            self.snapshot_repo.save(player_id, json.dumps(game.to_dict()))
        except SQLAlchemyError as e:
            logger.error(f"[{player_id}] Failed to save game: {e}")
            return Result.err("Failed to save game")
        logger.debug(f"[{player_id}] Game saved: state={game.game_state.value}, round={game.round}")
        return Result.ok(game)

    def clear(self, player_id: str) -> Result[bool]:
        """Remove a player's saved game."""
        try:
            removed = self.snapshot_repo.delete(player_id)
        except SQLAlchemyError as e:
            logger.error(f"[{player_id}] Failed to clear saved game: {e}")
            return Result.err("Failed to clear saved game")
        return Result.ok(removed)
