"""Durable per-device key-value stores.

Every higher level store (preferences, favorites, search history) persists a
single JSON document through the :class:`KeyValueStore` contract. The contract
is deliberately tiny and synchronous: ``get``, ``set`` and ``remove`` either
complete or raise :class:`~dictionary_client.errors.StorageError`. Callers are
expected to catch that error at the call site and degrade to a no-op.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from dictionary_client.errors import StorageError
from dictionary_client.settings import AppSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous string key-value storage scoped to the local device."""

    def get(self, key: str) -> str | None:
        """Return the stored value for ``key`` or ``None`` when absent."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` replacing any previous value."""

    def remove(self, key: str) -> None:
        """Delete ``key``; removing an absent key is not an error."""


class MemoryKeyValueStore:
    """Process-local store used by tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileKeyValueStore:
    """Persist every key inside one JSON object on disk.

    The file is re-read on each access so edits made by another process are
    picked up; writes go through a temporary file followed by an atomic
    replace. A corrupt or non-object document is treated as an empty store.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise StorageError("read", str(self.path), str(exc)) from exc
        try:
            data = json.loads(raw.decode("utf-8") or "{}")
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.error("Ignoring storage file %s: expected a JSON object", self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self, data: dict[str, str], key: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(".tmp")
            tmp_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StorageError("write", key, str(exc)) from exc

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data, key)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key not in data:
                return
            del data[key]
            self._write(data, key)


def _is_redis_connection_error(exc: BaseException) -> bool:
    """Return ``True`` when ``exc`` represents a Redis availability failure."""

    return isinstance(exc, (RedisConnectionError, RedisTimeoutError))


class RedisKeyValueStore:
    """Key-value store backed by a synchronous Redis client.

    Only connection-level failures are translated into :class:`StorageError`;
    anything else is a programming error and propagates unchanged.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(cls, url: str) -> RedisKeyValueStore:
        client = redis.Redis.from_url(url, decode_responses=True, encoding="utf-8")
        return cls(client)

    def get(self, key: str) -> str | None:
        try:
            value = self._redis.get(key)
        except Exception as exc:  # type: ignore[broad-except]
            if _is_redis_connection_error(exc):
                raise StorageError("read", key, str(exc)) from exc
            raise
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(key, value)
        except Exception as exc:  # type: ignore[broad-except]
            if _is_redis_connection_error(exc):
                raise StorageError("write", key, str(exc)) from exc
            raise

    def remove(self, key: str) -> None:
        try:
            self._redis.delete(key)
        except Exception as exc:  # type: ignore[broad-except]
            if _is_redis_connection_error(exc):
                raise StorageError("remove", key, str(exc)) from exc
            raise

    def close(self) -> None:
        self._redis.close()


def build_key_value_store(settings: AppSettings) -> KeyValueStore:
    """Instantiate the durable store selected by ``settings.storage_backend``."""

    backend = settings.storage_backend
    if backend == "memory":
        logger.info("Using in-memory key-value store")
        return MemoryKeyValueStore()
    if backend == "redis":
        logger.info("Using Redis key-value store")
        return RedisKeyValueStore.from_url(settings.redis_url)
    logger.info("Using file key-value store at %s", settings.storage_path)
    return FileKeyValueStore(settings.storage_path)


__all__ = [
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "RedisKeyValueStore",
    "build_key_value_store",
]
