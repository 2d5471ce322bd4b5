"""Tests for the clock and trusted-time lookup."""

from datetime import UTC, datetime

import httpx
import pytest

from blindglobe.core.errors import ConfigurationError
from blindglobe.game.time_source import TimeSource

# 2024-01-03 01:00 in Denver
LOCAL_NOW = datetime(2024, 1, 3, 8, 0, tzinfo=UTC)


def _source(handler=None, trust_remote: bool = True) -> TimeSource:
    transport = httpx.MockTransport(handler) if handler else None
    return TimeSource(
        timezone="America/Denver",
        trust_remote=trust_remote,
        time_check_url="https://time.example.com",
        timeout=0.5,
        clock=lambda: LOCAL_NOW,
        transport=transport,
    )


class TestTimeSource:
    """Tests for resolving the daily key."""

    def test_local_clock(self):
        """Test the local key is the clock projected into the timezone."""
        source = _source(trust_remote=False)
        assert source.today_key() == "2024-01-03"
        assert source.resolve_date_key() == "2024-01-03"

    def test_remote_date_header(self):
        """Test the trusted Date header wins over the local clock."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "HEAD"
            return httpx.Response(200, headers={"Date": "Tue, 02 Jan 2024 06:00:00 GMT"})

        assert _source(handler).resolve_date_key() == "2024-01-01"

    def test_local_setting_skips_network(self):
        """Test no request is made when the local clock is trusted."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("network should not be used")

        assert _source(handler, trust_remote=False).resolve_date_key() == "2024-01-03"

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(503),
            httpx.Response(200),
            httpx.Response(200, headers={"Date": "not a date"}),
        ],
    )
    def test_bad_response_falls_back(self, response):
        """Test server errors and bad headers fall back to the local clock."""
        assert _source(lambda request: response).fetch_trusted_date_key() == "2024-01-03"

    def test_network_error_falls_back(self):
        """Test transport failures fall back to the local clock."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        assert _source(handler).fetch_trusted_date_key() == "2024-01-03"

    def test_timeout_falls_back(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        assert _source(handler).resolve_date_key() == "2024-01-03"

    def test_unknown_timezone(self):
        with pytest.raises(ConfigurationError):
            TimeSource(timezone="Nowhere/Special")

    def test_from_settings(self, test_settings):
        source = TimeSource.from_settings(test_settings)
        assert source.timezone == "America/Denver"
        assert source.trust_remote is False
