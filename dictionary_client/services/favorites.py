"""Favorited entity identifiers persisted in the device store."""

from __future__ import annotations

import logging

from dictionary_client.settings import DEFAULT_STORAGE_NAMESPACE
from dictionary_client.storage.codec import decode_or_default, encode, safe_get, safe_remove, safe_set
from dictionary_client.storage.keys import favorites_key
from dictionary_client.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


class FavoritesStore:
    """Ordered, duplicate-free set of favorited word identifiers.

    The set is small, so every mutation reads the whole list, modifies it and
    writes it back.
    """

    def __init__(self, store: KeyValueStore, *, namespace: str = DEFAULT_STORAGE_NAMESPACE) -> None:
        self._store = store
        self._key = favorites_key(namespace)

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> list[str]:
        stored = decode_or_default(
            safe_get(self._store, self._key), list[str], [], label="favorites"
        )
        # Hand-edited records may repeat ids; keep the first occurrence.
        return list(dict.fromkeys(stored))

    def replace(self, ids: list[str]) -> bool:
        """Overwrite the whole set, dropping duplicates while keeping order."""

        return safe_set(self._store, self._key, encode(list(dict.fromkeys(ids))))

    def add(self, entity_id: str) -> None:
        favorites = self.get()
        if entity_id in favorites:
            return
        favorites.append(entity_id)
        self.replace(favorites)

    def remove(self, entity_id: str) -> None:
        favorites = self.get()
        if entity_id not in favorites:
            return
        self.replace([existing for existing in favorites if existing != entity_id])

    def toggle(self, entity_id: str) -> bool:
        """Flip the favorite state of ``entity_id`` and return the new state."""

        if self.is_favorite(entity_id):
            self.remove(entity_id)
            return False
        self.add(entity_id)
        return True

    def is_favorite(self, entity_id: str) -> bool:
        return entity_id in self.get()

    def clear(self) -> None:
        safe_remove(self._store, self._key)


__all__ = ["FavoritesStore"]
