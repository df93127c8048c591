"""Shared fixtures for error_details unit tests."""

from typing import Generator

import pytest

from error_details.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate every test from cached settings and ambient ERROR_DETAILS_* vars."""
    monkeypatch.delenv("ERROR_DETAILS_INCLUDE_DEBUG_INFO", raising=False)
    monkeypatch.delenv("ERROR_DETAILS_MAX_STACK_ENTRIES", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
