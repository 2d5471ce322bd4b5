"""Service layer for business logic."""

from blindglobe.game.services.game import GameService

__all__ = ["GameService"]
