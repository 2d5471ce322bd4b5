"""Game session state machine.

A session moves start -> playing -> revealed -> playing ... -> finished.
Transitions that arrive in the wrong state are ignored and return False.
Each transition computes all of its field changes first and applies them
together, so a session is never left half-updated.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from blindglobe.game.catalog import City
from blindglobe.game.daily_seed import DailyGameData, DailySeedGenerator
from blindglobe.game.scoring import ScoreCalculator, round_half_up

logger = logging.getLogger(__name__)

TOTAL_ROUNDS = 3


class GameState(str, Enum):
    """Lifecycle state of a daily game."""

    START = "start"
    PLAYING = "playing"
    REVEALED = "revealed"
    FINISHED = "finished"


@dataclass(frozen=True)
class Guess:
    """A coordinate placed by the player."""

    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Guess | None":
        if data is None:
            return None
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))


@dataclass(frozen=True)
class PlayerStats:
    """Lifetime statistics, kept across days."""

    games_played: int = 0
    high_score: int = 0
    total_lifetime_score: int = 0
    last_played_date: str = ""

    @property
    def average_score(self) -> int:
        """Mean score per completed game."""
        if self.games_played == 0:
            return 0
        return round_half_up(self.total_lifetime_score / self.games_played)

    def to_dict(self) -> dict:
        """Convert to dictionary for snapshots and API responses."""
        return {
            "games_played": self.games_played,
            "high_score": self.high_score,
            "total_lifetime_score": self.total_lifetime_score,
            "last_played_date": self.last_played_date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerStats":
        return cls(
            games_played=int(data.get("games_played", 0)),
            high_score=int(data.get("high_score", 0)),
            total_lifetime_score=int(data.get("total_lifetime_score", 0)),
            last_played_date=str(data.get("last_played_date", "")),
        )


SessionListener = Callable[["GameSession"], None]


class GameSession:
    """One player's daily game: rounds, scores, hints and lifetime stats."""

    def __init__(
        self,
        generator: DailySeedGenerator,
        stats: PlayerStats | None = None,
        daily: DailyGameData | None = None,
    ):
        self._generator = generator
        self._listeners: list[SessionListener] = []

        self.stats = stats or PlayerStats()
        self.daily = daily
        self.game_state = GameState.START
        self.round = 1
        self.total_score = 0
        # Raw guess score of the revealed round; penalties live in round_penalty
        self.round_score = 0
        self.round_penalty = 0
        self.temp_guess: Guess | None = None
        self.guess: Guess | None = None
        self.hint_level = 0
        self.last_distance_km: int | None = None

    # Observers

    def add_listener(self, listener: SessionListener) -> None:
        """Register a callback run after every applied transition."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            try:
                listener(self)
            except Exception as e:
                logger.error(f"Session listener failed: {type(e).__name__}: {e}")

    def _apply(self, changes: dict[str, Any]) -> bool:
        for name, value in changes.items():
            setattr(self, name, value)
        self._notify()
        return True

    def _ignore(self, action: str) -> bool:
        logger.debug(
            f"Ignoring {action} in state={self.game_state.value} "
            f"(round={self.round}, hint_level={self.hint_level})"
        )
        return False

    @staticmethod
    def _new_game_fields() -> dict[str, Any]:
        return {
            "round": 1,
            "total_score": 0,
            "round_score": 0,
            "round_penalty": 0,
            "temp_guess": None,
            "guess": None,
            "hint_level": 0,
            "last_distance_km": None,
        }

    # Read access

    @property
    def current_target(self) -> City | None:
        """Target city of the current round."""
        if self.daily is None:
            return None
        return self.daily.target_cities[self.round - 1]

    @property
    def current_reference(self) -> City | None:
        """Reference city of the current round."""
        if self.daily is None:
            return None
        return self.daily.reference_cities[self.round - 1]

    @property
    def net_round_score(self) -> int:
        return self.round_score - self.round_penalty

    # Transitions

    def initialize(self, today: str) -> bool:
        """Enter a day. A new day regenerates the rounds and resets the game.

        Re-entering the same day keeps in-progress or finished state as is.
        """
        if self.stats.last_played_date != today:
            daily = self._generator.generate(today)
            changes = self._new_game_fields()
            changes.update(
                daily=daily,
                game_state=GameState.START,
                stats=replace(self.stats, last_played_date=today),
            )
            logger.info(f"New day {today}, previous day {self.stats.last_played_date or '-'}")
            return self._apply(changes)

        if self.daily is None:
            logger.info(f"Regenerating missing daily rounds for {today}")
            return self._apply({"daily": self._generator.generate(today)})

        return False

    def start_game(self) -> bool:
        """Begin round 1. A finished day cannot be replayed."""
        if self.game_state == GameState.FINISHED:
            return self._ignore("start_game")
        changes = self._new_game_fields()
        changes["game_state"] = GameState.PLAYING
        return self._apply(changes)

    def set_temp_guess(self, lat: float, lng: float) -> bool:
        """Place or move the unconfirmed pin."""
        if self.game_state != GameState.PLAYING:
            return self._ignore("set_temp_guess")
        return self._apply({"temp_guess": Guess(lat=lat, lng=lng)})

    def use_hint(self) -> bool:
        """Unlock the next hint level for this round."""
        if self.game_state != GameState.PLAYING:
            return self._ignore("use_hint")
        if self.hint_level >= ScoreCalculator.MAX_HINT_LEVEL:
            return self._ignore("use_hint")
        return self._apply({"hint_level": self.hint_level + 1})

    def confirm_guess(self) -> bool:
        """Lock in the pin and score the round."""
        if self.game_state != GameState.PLAYING or self.temp_guess is None:
            return self._ignore("confirm_guess")
        target = self.current_target
        if target is None:
            logger.warning("confirm_guess with no daily rounds loaded")
            return False

        result = ScoreCalculator.score_guess(
            self.temp_guess.lat,
            self.temp_guess.lng,
            target.lat,
            target.lng,
            hint_level=self.hint_level,
        )
        logger.info(
            f"Round {self.round} ({target.name}): {result.distance_km:.1f} km, "
            f"score={result.raw_score}, penalty={result.penalty}"
        )
        return self._apply(
            {
                "guess": self.temp_guess,
                "temp_guess": None,
                "game_state": GameState.REVEALED,
                "round_score": result.raw_score,
                "round_penalty": result.penalty,
                "total_score": self.total_score + result.net_score,
                "last_distance_km": round_half_up(result.distance_km),
            }
        )

    def next_round(self) -> bool:
        """Advance past a revealed round, finishing the game after the last one."""
        if self.game_state != GameState.REVEALED:
            return self._ignore("next_round")

        if self.round < TOTAL_ROUNDS:
            return self._apply(
                {
                    "round": self.round + 1,
                    "game_state": GameState.PLAYING,
                    "guess": None,
                    "temp_guess": None,
                    "round_score": 0,
                    "round_penalty": 0,
                    "hint_level": 0,
                    "last_distance_km": None,
                }
            )

        stats = replace(
            self.stats,
            games_played=self.stats.games_played + 1,
            high_score=max(self.stats.high_score, self.total_score),
            total_lifetime_score=self.stats.total_lifetime_score + self.total_score,
        )
        logger.info(f"Game finished: total_score={self.total_score}, games_played={stats.games_played}")
        return self._apply(
            {"game_state": GameState.FINISHED, "stats": stats, "last_distance_km": None}
        )

    def reset_game(self) -> bool:
        """Force the session back to the start screen. Stats are kept."""
        changes = self._new_game_fields()
        changes["game_state"] = GameState.START
        return self._apply(changes)

    # Serialization

    def snapshot(self) -> dict:
        """Read-only view for the rendering layer."""
        target = self.current_target
        return {
            "game_state": self.game_state.value,
            "round": self.round,
            "total_rounds": TOTAL_ROUNDS,
            "total_score": self.total_score,
            "round_score": self.round_score,
            "round_penalty": self.round_penalty,
            "net_round_score": self.net_round_score,
            "temp_guess": self.temp_guess.to_dict() if self.temp_guess else None,
            "guess": self.guess.to_dict() if self.guess else None,
            "last_distance_km": self.last_distance_km,
            "target_city": target.to_dict() if target else None,
            "reference_city": self.current_reference.to_dict() if self.current_reference else None,
            "hint": {
                "level": self.hint_level,
                "country": target.country if target and self.hint_level >= 1 else None,
                "show_outlines": self.hint_level >= 2,
            },
            "date_key": self.daily.date_key if self.daily else None,
            "stats": {**self.stats.to_dict(), "average_score": self.stats.average_score},
        }

    def to_dict(self) -> dict:
        """Persisted form of the session."""
        return {
            "game_state": self.game_state.value,
            "round": self.round,
            "total_score": self.total_score,
            "round_score": self.round_score,
            "round_penalty": self.round_penalty,
            "hint_level": self.hint_level,
            "guess": self.guess.to_dict() if self.guess else None,
            "last_distance_km": self.last_distance_km,
            "daily": self.daily.to_dict() if self.daily else None,
            **self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], generator: DailySeedGenerator) -> "GameSession":
        """Restore a persisted session.

        Raises:
            KeyError, TypeError, ValueError: If the data is malformed.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a dict, got {type(data).__name__}")

        daily_data = data.get("daily")
        session = cls(
            generator,
            stats=PlayerStats.from_dict(data),
            daily=DailyGameData.from_dict(daily_data) if daily_data else None,
        )

        round_number = int(data.get("round", 1))
        hint_level = int(data.get("hint_level", 0))
        if not 1 <= round_number <= TOTAL_ROUNDS:
            raise ValueError(f"Round out of range: {round_number}")
        if not 0 <= hint_level <= ScoreCalculator.MAX_HINT_LEVEL:
            raise ValueError(f"Hint level out of range: {hint_level}")

        last_distance = data.get("last_distance_km")
        session.game_state = GameState(data.get("game_state", GameState.START.value))
        session.round = round_number
        session.total_score = int(data.get("total_score", 0))
        session.round_score = int(data.get("round_score", 0))
        session.round_penalty = int(data.get("round_penalty", 0))
        session.hint_level = hint_level
        session.guess = Guess.from_dict(data.get("guess"))
        session.last_distance_km = int(last_distance) if last_distance is not None else None
        return session
