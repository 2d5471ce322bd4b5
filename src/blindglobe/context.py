"""Application context - central container for shared dependencies."""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from blindglobe.config import Settings
from blindglobe.db.session import create_db_engine, create_session_factory, session_scope
from blindglobe.game.catalog import Catalog, get_catalog
from blindglobe.game.daily_seed import DailySeedGenerator
from blindglobe.game.time_source import TimeSource

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Container for application-wide dependencies.

    Initialize once at app startup via create_context().
    """

    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    catalog: Catalog
    generator: DailySeedGenerator
    time_source: TimeSource

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Get a database session as a context manager."""
        with session_scope(self.session_factory) as session:
            yield session


def create_context(settings: Settings | None = None, engine: Engine | None = None) -> AppContext:
    """Create and return a fully initialized application context.

    Raises:
        ConfigurationError: If the catalog or timezone is invalid.
    """
    logger.info("Creating application context")

    if settings is None:
        from blindglobe.config import get_settings

        settings = get_settings()

    # Validates the catalog and timezone before anything else starts
    catalog = get_catalog()
    time_source = TimeSource.from_settings(settings)

    if engine is None:
        engine = create_db_engine(settings.database_url)
        logger.debug(f"Database engine created: {settings.database_url}")

    logger.info(
        f"Application context created (timezone={settings.timezone}, "
        f"trust_source={settings.trust_source}, cities={len(catalog)})"
    )

    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        catalog=catalog,
        generator=DailySeedGenerator(catalog),
        time_source=time_source,
    )
