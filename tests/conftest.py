"""Pytest configuration helpers for the dictionary client.

The ``pytest`` plugin system automatically imports ``tests.conftest``. We use
that behavior to put the repository root on ``sys.path`` and to keep the
process environment from leaking configuration into individual tests.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tests import _ensure_repo_on_path

_SETTINGS_ENV_VARS = (
    "API_BASE_URL",
    "CONTENT_PATH",
    "EVENTS_PATH",
    "PUSH_ENABLED",
    "POLL_INTERVAL_SECONDS",
    "PUSH_RETRY_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
    "STORAGE_BACKEND",
    "STORAGE_PATH",
    "STORAGE_NAMESPACE",
    "REDIS_URL",
    "LOG_LEVEL",
)


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()


@pytest.fixture(autouse=True)
def _clean_settings_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop configuration variables and the cached settings around each test."""

    from dictionary_client.settings import get_settings

    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
