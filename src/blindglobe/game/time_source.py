"""Clock and trusted-time lookup for the daily key."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

from blindglobe.config import Settings
from blindglobe.core.errors import TransientTimeSourceError
from blindglobe.game.daily_seed import date_key_for, get_timezone

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TimeSource:
    """Resolves today's daily key from the local clock or a trusted server.

    The remote check reads the ``Date`` header of a HEAD response. It is
    best-effort: any failure falls back to the local clock without retrying.
    """

    def __init__(
        self,
        timezone: str,
        trust_remote: bool = False,
        time_check_url: str = "",
        timeout: float = 2.0,
        clock: Callable[[], datetime] = _utc_now,
        transport: httpx.BaseTransport | None = None,
    ):
        get_timezone(timezone)  # fail fast on a bad timezone
        self.timezone = timezone
        self.trust_remote = trust_remote
        self.time_check_url = time_check_url
        self.timeout = timeout
        self._clock = clock
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "TimeSource":
        """Build a time source from application settings."""
        return cls(
            timezone=settings.timezone,
            trust_remote=settings.uses_remote_time,
            time_check_url=settings.time_check_url,
            timeout=settings.time_check_timeout,
        )

    def now(self) -> datetime:
        """Current instant from the local clock."""
        return self._clock()

    def today_key(self) -> str:
        """Daily key from the local clock."""
        return date_key_for(self.now(), self.timezone)

    def _fetch_server_time(self) -> datetime:
        """Read the Date header from the trusted URL.

        Raises:
            TransientTimeSourceError: On any network, status or parsing failure.
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.head(self.time_check_url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransientTimeSourceError(f"Time check request failed: {e}") from e

        header = response.headers.get("Date")
        if not header:
            raise TransientTimeSourceError("No Date header in time check response")
        try:
            server_time = parsedate_to_datetime(header)
        except (TypeError, ValueError) as e:
            raise TransientTimeSourceError(f"Malformed Date header: {header!r}") from e
        if server_time.tzinfo is None:
            server_time = server_time.replace(tzinfo=UTC)
        return server_time

    def fetch_trusted_date_key(self) -> str:
        """Daily key from the trusted server, or the local clock if that fails."""
        try:
            return date_key_for(self._fetch_server_time(), self.timezone)
        except TransientTimeSourceError as e:
            logger.warning(f"Failed to fetch server time, falling back to local time: {e}")
            return self.today_key()

    def resolve_date_key(self) -> str:
        """Daily key from the configured trust source."""
        if self.trust_remote:
            return self.fetch_trusted_date_key()
        return self.today_key()
