"""Exception taxonomy shared by the local state and synchronization layer."""

from __future__ import annotations


class DictionaryClientError(Exception):
    """Base class for errors raised inside the client state layer."""


class StorageError(DictionaryClientError):
    """Raised when the durable key-value store cannot complete an operation."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        super().__init__(f"Storage {operation} failed for {key!r}: {reason}")
        self.operation = operation
        self.key = key
        self.reason = reason


class ContentFetchError(DictionaryClientError):
    """Raised when the content document cannot be fetched or decoded."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChannelUnavailableError(DictionaryClientError):
    """Raised when the push notification channel cannot be used at all."""


__all__ = [
    "ChannelUnavailableError",
    "ContentFetchError",
    "DictionaryClientError",
    "StorageError",
]
