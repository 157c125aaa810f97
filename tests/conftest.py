"""Shared pytest fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any configure_logging() call so loggers never hold a closed stream."""
    yield
    structlog.reset_defaults()
