"""Durable per-device storage primitives.

The package exposes the :class:`KeyValueStore` contract with its in-memory,
file and Redis implementations, the namespaced key helpers, and the
decode-or-default codec used by every higher level store.
"""

from .codec import decode_or_default, encode, safe_get, safe_remove, safe_set
from .kv import (
    FileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    RedisKeyValueStore,
    build_key_value_store,
)

__all__ = [
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "RedisKeyValueStore",
    "build_key_value_store",
    "decode_or_default",
    "encode",
    "safe_get",
    "safe_remove",
    "safe_set",
]
