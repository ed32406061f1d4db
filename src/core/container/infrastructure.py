"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console adapter)
- Database (SQLAlchemy engine + sessions)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.infrastructure.persistence.database import Database


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_database() -> "Database":
    """Return the application-scoped database singleton.

    Tables are created on first use when running against SQLite (tests,
    local development); other databases are expected to be migrated.

    Returns:
        Database: Engine and session factory for settings.database_url.
    """
    from src.infrastructure.persistence.database import Database

    database = Database(settings.database_url, echo=settings.db_echo)
    if settings.database_url.startswith("sqlite"):
        database.create_all()
    return database
