"""Pytest configuration and shared fixtures.

Provides:
1. A mock structured logger (bind() returns the same mock)
2. A fresh in-memory ACL provider per test
3. Marker registration for unit/integration tests
"""

from unittest.mock import MagicMock

import pytest

from src.infrastructure.acl import InMemoryAclProvider


@pytest.fixture
def mock_logger() -> MagicMock:
    """Mock LoggerProtocol; bound loggers are the same mock."""
    logger = MagicMock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


@pytest.fixture
def provider() -> InMemoryAclProvider:
    """Fresh in-memory ACL provider."""
    return InMemoryAclProvider()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with a real database"
    )
