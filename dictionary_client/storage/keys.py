"""Stable durable-store key names.

Each store owns exactly one record. Keys are prefixed with the configured
namespace so several applications can share one device store.
"""

from __future__ import annotations

from dictionary_client.settings import DEFAULT_STORAGE_NAMESPACE

USER_PREFERENCES = "user_preferences"
SEARCH_HISTORY = "search_history"
FAVORITES = "favorites"
DEVELOPER_CONSOLE = "dev_console"
QUIZ_PROGRESS = "quiz_progress"

ALL_RECORDS: tuple[str, ...] = (
    USER_PREFERENCES,
    SEARCH_HISTORY,
    FAVORITES,
    DEVELOPER_CONSOLE,
    QUIZ_PROGRESS,
)


def storage_key(name: str, namespace: str = DEFAULT_STORAGE_NAMESPACE) -> str:
    return f"{namespace}_{name}"


def preferences_key(namespace: str = DEFAULT_STORAGE_NAMESPACE) -> str:
    return storage_key(USER_PREFERENCES, namespace)


def search_history_key(namespace: str = DEFAULT_STORAGE_NAMESPACE) -> str:
    return storage_key(SEARCH_HISTORY, namespace)


def favorites_key(namespace: str = DEFAULT_STORAGE_NAMESPACE) -> str:
    return storage_key(FAVORITES, namespace)


def developer_console_key(namespace: str = DEFAULT_STORAGE_NAMESPACE) -> str:
    return storage_key(DEVELOPER_CONSOLE, namespace)


def all_keys(namespace: str = DEFAULT_STORAGE_NAMESPACE) -> list[str]:
    """Return every key this application may write, in a stable order."""

    return [storage_key(name, namespace) for name in ALL_RECORDS]


__all__ = [
    "ALL_RECORDS",
    "DEVELOPER_CONSOLE",
    "FAVORITES",
    "QUIZ_PROGRESS",
    "SEARCH_HISTORY",
    "USER_PREFERENCES",
    "all_keys",
    "developer_console_key",
    "favorites_key",
    "preferences_key",
    "search_history_key",
    "storage_key",
]
