"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from moneygame_backend.finance.configuration import get_default_finance_configuration
from moneygame_backend.settings import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are loaded with predictable values during tests."""
    monkeypatch.setenv("LOG_JSON", "false")
    get_settings.cache_clear()
    get_default_finance_configuration.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_finance_configuration.cache_clear()
