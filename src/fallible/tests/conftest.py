"""Shared fixtures for fallible tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from fallible.foundation.config import clear_settings_cache
from fallible.tests.helpers import Flaky

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def clean_settings() -> Generator[None, None, None]:
    """Reset cached settings before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch the runner's sleep so delay handling can be asserted without waiting."""
    with patch("fallible.runtime.runner.time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def flaky() -> type[Flaky]:
    """Factory for operations that fail a fixed number of times before succeeding."""
    return Flaky
