"""Game logic module for Blind Globe."""

from blindglobe.game.catalog import Catalog, City, Difficulty, get_catalog
from blindglobe.game.daily_seed import DailyGameData, DailySeedGenerator, date_key_for
from blindglobe.game.scoring import RoundScore, ScoreCalculator, haversine_km
from blindglobe.game.session import GameSession, GameState, Guess, PlayerStats
from blindglobe.game.share import format_share_text
from blindglobe.game.time_source import TimeSource

__all__ = [
    "Catalog",
    "City",
    "Difficulty",
    "get_catalog",
    "DailyGameData",
    "DailySeedGenerator",
    "date_key_for",
    "RoundScore",
    "ScoreCalculator",
    "haversine_km",
    "GameSession",
    "GameState",
    "Guess",
    "PlayerStats",
    "format_share_text",
    "TimeSource",
]
