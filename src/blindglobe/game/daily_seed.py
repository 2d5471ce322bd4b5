"""Deterministic daily round generation.

Every player sees the same three rounds on the same civil day. The only
input is the daily key (``YYYY-MM-DD`` in the configured timezone), which
seeds a reproducible random stream.
"""

import hashlib
import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

import pytz
from pytz import utc

from blindglobe.core.errors import ConfigurationError
from blindglobe.game.catalog import TIER_ORDER, Catalog, City

logger = logging.getLogger(__name__)

T = TypeVar("T")

DATE_KEY_FORMAT = "%Y-%m-%d"


def get_timezone(name: str) -> pytz.BaseTzInfo:
    """Resolve an IANA timezone name.

    Raises:
        ConfigurationError: If the name is not a known timezone.
    """
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ConfigurationError(f"Unknown timezone: {name}") from e


def date_key_for(now: datetime, timezone: str) -> str:
    """Project an instant onto the civil calendar of a timezone.

    Naive datetimes are taken to be UTC.
    """
    if now.tzinfo is None:
        now = utc.localize(now)
    return now.astimezone(get_timezone(timezone)).strftime(DATE_KEY_FORMAT)


def parse_date_key(date_key: str) -> str:
    """Validate a daily key and return it in canonical form.

    Raises:
        ValueError: If the key is not a calendar date in YYYY-MM-DD form.
    """
    return datetime.strptime(date_key, DATE_KEY_FORMAT).strftime(DATE_KEY_FORMAT)


class SeedStream:
    """Reproducible float stream derived from a string key.

    The key is hashed with blake2b so the seed does not depend on Python's
    per-process string hashing.
    """

    def __init__(self, key: str):
        digest = hashlib.blake2b(key.encode("utf-8"), digest_size=8).digest()
        self._rng = random.Random(int.from_bytes(digest, byteorder="big", signed=False))

    def next_float(self) -> float:
        """Next value in [0, 1)."""
        return self._rng.random()

    def next_index(self, size: int) -> int:
        """Uniform index in [0, size)."""
        return int(self.next_float() * size)

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy of items."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.next_index(i + 1)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled


@dataclass(frozen=True)
class DailyGameData:
    """The three rounds of one day."""

    date_key: str
    target_cities: tuple[City, ...]
    reference_cities: tuple[City, ...]

    def to_dict(self) -> dict:
        """Convert to dictionary for snapshots and API responses."""
        return {
            "date_key": self.date_key,
            "target_cities": [c.to_dict() for c in self.target_cities],
            "reference_cities": [c.to_dict() for c in self.reference_cities],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DailyGameData":
        """Rebuild stored daily data.

        Raises:
            KeyError, TypeError, ValueError: If the data is malformed.
        """
        targets = tuple(City.from_dict(c) for c in data["target_cities"])
        references = tuple(City.from_dict(c) for c in data["reference_cities"])
        if len(targets) != len(TIER_ORDER) or len(references) != len(TIER_ORDER):
            raise ValueError("Daily data must hold one target and reference per round")
        return cls(
            date_key=str(data.get("date_key", "")),
            target_cities=targets,
            reference_cities=references,
        )


class DailySeedGenerator:
    """Selects the daily target and reference cities from a catalog."""

    def __init__(self, catalog: Catalog):
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def generate(self, date_key: str) -> DailyGameData:
        """Build the rounds for a daily key. Same key, same rounds."""
        stream = SeedStream(date_key)

        shuffled_tiers = [stream.shuffle(self._catalog.tier(tier)) for tier in TIER_ORDER]
        targets = tuple(tier[0] for tier in shuffled_tiers)
        references = tuple(self._pick_reference(stream, target) for target in targets)

        logger.info(
            f"Daily rounds for {date_key}: "
            + ", ".join(f"{r.name} -> {t.name}" for r, t in zip(references, targets))
        )
        return DailyGameData(
            date_key=date_key,
            target_cities=targets,
            reference_cities=references,
        )

    def _pick_reference(self, stream: SeedStream, target: City) -> City:
        """Draw from the whole catalog until the city differs from the target."""
        cities = self._catalog.cities
        while True:
            candidate = cities[stream.next_index(len(cities))]
            if candidate.name != target.name:
                return candidate
