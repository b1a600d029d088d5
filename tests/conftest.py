"""Shared test fixtures for the notionkit test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from notionkit.config import NotionkitConfig


@pytest.fixture
def config() -> NotionkitConfig:
    """Default test configuration with a dummy token."""
    return NotionkitConfig(token="test_token_1234")


@pytest.fixture
def spy_transport() -> MagicMock:
    """A sync transport spy; ``request`` returns ``{}`` unless overridden."""
    t = MagicMock()
    t.request.return_value = {}
    return t


@pytest.fixture
def async_spy_transport() -> MagicMock:
    """An async transport spy whose ``request`` is an :class:`AsyncMock`."""
    t = MagicMock()
    t.request = AsyncMock(return_value={})
    return t
