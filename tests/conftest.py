"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from blindglobe.config import Settings, get_settings
from blindglobe.context import create_context
from blindglobe.db.models import Base
from blindglobe.game.catalog import get_catalog
from blindglobe.game.daily_seed import DailyGameData, DailySeedGenerator
from blindglobe.game.session import GameSession


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite database engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Create a session factory bound to the test engine."""
    return sessionmaker(test_engine, class_=Session, expire_on_commit=False)


@pytest.fixture
def test_session(test_session_factory):
    """Provide a test database session that auto-commits."""
    session = test_session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("TIMEZONE", "America/Denver")
    monkeypatch.setenv("TRUST_SOURCE", "local")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("SHARE_SITE", "blindglobe.test")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings():
    """Settings that ignore any local .env file."""
    return Settings(
        _env_file=None,
        timezone="America/Denver",
        trust_source="local",
        database_url="sqlite://",
        share_site="blindglobe.test",
    )


@pytest.fixture
def test_context(test_settings, test_engine):
    """Application context wired to the in-memory database."""
    return create_context(settings=test_settings, engine=test_engine)


@pytest.fixture
def catalog():
    """The built-in city catalog."""
    return get_catalog()


@pytest.fixture
def generator(catalog):
    """Daily generator over the built-in catalog."""
    return DailySeedGenerator(catalog)


@pytest.fixture
def fixed_daily(catalog):
    """Hand-picked rounds: Tokyo, Mumbai, Reykjavik."""
    return DailyGameData(
        date_key="2024-01-01",
        target_cities=(catalog.get("Tokyo"), catalog.get("Mumbai"), catalog.get("Reykjavik")),
        reference_cities=(catalog.get("London"), catalog.get("Cairo"), catalog.get("Lima")),
    )


@pytest.fixture
def game(generator, fixed_daily):
    """A session on 2024-01-01 with the fixed rounds, on the start screen."""
    session = GameSession(generator)
    session.initialize("2024-01-01")
    session.daily = fixed_daily
    return session


@pytest.fixture
def playing_game(game):
    """A session in round 1 with no pin placed."""
    game.start_game()
    return game
