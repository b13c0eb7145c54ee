"""Defensive encoding helpers shared by every durable record.

Stored records are untrusted: they may predate the current schema, may have
been edited by hand, or may have been truncated by a failed write. All reads
therefore flow through :func:`decode_or_default`, and all store calls flow
through the ``safe_*`` wrappers so that persistence failures are logged and
turned into no-ops instead of surfacing to the caller.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from dictionary_client.errors import StorageError
from dictionary_client.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=32)
def _adapter(schema: Any) -> TypeAdapter[Any]:
    return TypeAdapter(schema)


def decode_or_default(raw: str | None, schema: Any, default: T, *, label: str) -> T:
    """Decode ``raw`` against ``schema`` or fall back to ``default``.

    ``None`` means the record was never written and returns ``default``
    silently. Malformed JSON and schema mismatches are logged at error level
    and also return ``default``; they are never raised to the caller.
    """

    if raw is None:
        return default
    try:
        return _adapter(schema).validate_json(raw)
    except ValidationError as exc:
        logger.error("Discarding unreadable %s record: %s", label, exc)
        return default


def encode(value: Any, *, indent: int | None = None) -> str:
    """Serialise models and plain data into a JSON string."""

    return json.dumps(to_jsonable_python(value), indent=indent, ensure_ascii=False)


def safe_get(store: KeyValueStore, key: str) -> str | None:
    """Return ``store.get(key)`` or ``None`` when the store is unavailable."""

    try:
        return store.get(key)
    except StorageError as exc:
        logger.error("Failed to read %s: %s", key, exc)
        return None


def safe_set(store: KeyValueStore, key: str, value: str) -> bool:
    """Write ``value`` and report whether the write succeeded."""

    try:
        store.set(key, value)
    except StorageError as exc:
        logger.error("Failed to write %s: %s", key, exc)
        return False
    return True


def safe_remove(store: KeyValueStore, key: str) -> bool:
    """Remove ``key`` and report whether the removal succeeded."""

    try:
        store.remove(key)
    except StorageError as exc:
        logger.error("Failed to remove %s: %s", key, exc)
        return False
    return True


__all__ = [
    "decode_or_default",
    "encode",
    "safe_get",
    "safe_remove",
    "safe_set",
]
