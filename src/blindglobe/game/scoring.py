"""Distance and score calculations for guesses."""

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometers between two points in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class RoundScore:
    """Outcome of one confirmed guess."""

    distance_km: float
    raw_score: int
    penalty: int

    @property
    def net_score(self) -> int:
        """Raw score minus hint penalties. May be negative."""
        return self.raw_score - self.penalty

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "distance_km": round_half_up(self.distance_km),
            "raw_score": self.raw_score,
            "penalty": self.penalty,
            "net_score": self.net_score,
        }


class ScoreCalculator:
    """Scores guesses by distance and hint usage."""

    MAX_SCORE = 5000
    # Guesses closer than this get the full score
    PERFECT_RADIUS_KM = 50
    # Score falls linearly to zero over this many km past the perfect radius
    FALLOFF_KM = 5000

    # Penalty per hint level; levels are cumulative
    HINT_PENALTIES = (500, 2000)
    MAX_HINT_LEVEL = len(HINT_PENALTIES)

    @classmethod
    def guess_score(cls, distance_km: float) -> int:
        """Raw score for a guess at the given distance."""
        if distance_km < cls.PERFECT_RADIUS_KM:
            return cls.MAX_SCORE
        falloff = 1 - (distance_km - cls.PERFECT_RADIUS_KM) / cls.FALLOFF_KM
        return max(0, round_half_up(cls.MAX_SCORE * falloff))

    @classmethod
    def hint_penalty(cls, hint_level: int) -> int:
        """Total penalty for the hints used in a round."""
        level = max(0, min(hint_level, cls.MAX_HINT_LEVEL))
        return sum(cls.HINT_PENALTIES[:level])

    @classmethod
    def score_guess(
        cls,
        guess_lat: float,
        guess_lng: float,
        target_lat: float,
        target_lng: float,
        hint_level: int = 0,
    ) -> RoundScore:
        """Score a guess against a target location."""
        distance = haversine_km(guess_lat, guess_lng, target_lat, target_lng)
        return RoundScore(
            distance_km=distance,
            raw_score=cls.guess_score(distance),
            penalty=cls.hint_penalty(hint_level),
        )
