"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables
(optionally from a .env file).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic

Usage:
    from src.core.config import settings

    if settings.acl_backend == "sqlalchemy":
        database = Database(settings.database_url, echo=settings.db_echo)
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment


class Settings(BaseSettings):
    """
    Application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. .env file (if present)
        3. Default values

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # ACL storage
    acl_backend: Literal["memory", "sqlalchemy"] = Field(
        default="memory",
        description="ACL provider backend (memory or sqlalchemy)",
    )
    database_url: str = Field(
        default="sqlite+pysqlite:///:memory:",
        description="SQLAlchemy database URL used by the sqlalchemy ACL backend",
    )
    db_echo: bool = Field(
        default=False,
        description="Log all SQL queries (debugging only)",
    )

    # Reconciliation
    default_insert_index: int = Field(
        default=0,
        ge=0,
        description="Preferred position of newly created entries (past the end appends)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name.

        Args:
            v: Log level from environment.

        Returns:
            str: Upper-cased level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing or CI environment."""
        return self.environment in {Environment.TESTING, Environment.CI}

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application configuration (cached after first call).
    """
    return Settings()


settings = get_settings()
