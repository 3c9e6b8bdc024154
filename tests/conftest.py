"""Pytest configuration and fixtures."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

import pytest
import structlog

from nunit_results.config import get_settings
from nunit_results.logging import configure_logging

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore the default logging configuration after each test."""
    yield
    structlog.reset_defaults()
    configure_logging()


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Ensure each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def log_output() -> StringIO:
    """Capture JSON log lines at DEBUG level."""
    output = StringIO()
    configure_logging(log_level="DEBUG", json_format=True, stream=output)
    return output
