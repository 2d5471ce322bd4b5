"""City catalog: the fixed pool that daily rounds are drawn from."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from blindglobe.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Difficulty(str, Enum):
    """Difficulty tier of a city. Round 1 is easy, round 3 is hard."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Round order of the tiers
TIER_ORDER: tuple[Difficulty, ...] = (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)


@dataclass(frozen=True)
class City:
    """A city the player can be asked to find."""

    name: str
    lat: float
    lng: float
    difficulty: Difficulty
    country: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for snapshots and API responses."""
        return {
            "name": self.name,
            "lat": self.lat,
            "lng": self.lng,
            "difficulty": self.difficulty.value,
            "country": self.country,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "City":
        """Build a City from a stored dict.

        Raises:
            KeyError, TypeError, ValueError: If the dict is malformed.
        """
        return cls(
            name=str(data["name"]),
            lat=float(data["lat"]),
            lng=float(data["lng"]),
            difficulty=Difficulty(data["difficulty"]),
            country=str(data.get("country", "")),
        )


class Catalog:
    """Validated, ordered collection of cities.

    Validation happens once here so that reference-city selection can never
    loop forever at play time.
    """

    def __init__(self, cities: Iterable[City]):
        self._cities = tuple(cities)
        self._tiers = {
            tier: tuple(c for c in self._cities if c.difficulty == tier) for tier in TIER_ORDER
        }
        self._validate()
        logger.debug(
            "Catalog loaded: "
            + ", ".join(f"{tier.value}={len(self._tiers[tier])}" for tier in TIER_ORDER)
        )

    def _validate(self) -> None:
        for city in self._cities:
            if not -90.0 <= city.lat <= 90.0:
                raise ConfigurationError(f"Latitude out of range for {city.name}: {city.lat}")
            if not -180.0 <= city.lng <= 180.0:
                raise ConfigurationError(f"Longitude out of range for {city.name}: {city.lng}")

        for tier in TIER_ORDER:
            if not self._tiers[tier]:
                raise ConfigurationError(f"Catalog has no {tier.value} cities")

        if len({c.name for c in self._cities}) < 2:
            raise ConfigurationError("Catalog needs at least 2 distinct city names")

    @property
    def cities(self) -> tuple[City, ...]:
        return self._cities

    def tier(self, difficulty: Difficulty) -> tuple[City, ...]:
        """Cities of one difficulty, in catalog order."""
        return self._tiers[difficulty]

    def get(self, name: str) -> City | None:
        """Look up a city by name."""
        for city in self._cities:
            if city.name == name:
                return city
        return None

    def __len__(self) -> int:
        return len(self._cities)


@lru_cache
def get_catalog() -> Catalog:
    """Get the validated built-in catalog."""
    from blindglobe.game.cities import CITIES

    return Catalog(CITIES)
