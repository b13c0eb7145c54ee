"""Bounded, recency-ordered log of past search queries."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from dictionary_client.schemas.history import MAX_SEARCH_HISTORY_ITEMS, SearchHistoryEntry
from dictionary_client.settings import DEFAULT_STORAGE_NAMESPACE
from dictionary_client.storage.codec import decode_or_default, encode, safe_get, safe_remove, safe_set
from dictionary_client.storage.keys import search_history_key
from dictionary_client.storage.kv import KeyValueStore
from dictionary_client.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)


class SearchHistoryStore:
    """Keep the most recent distinct queries, newest first.

    Re-issuing a query moves its entry to the front instead of appending a
    duplicate; entries beyond ``max_items`` are evicted oldest first.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        namespace: str = DEFAULT_STORAGE_NAMESPACE,
        max_items: int = MAX_SEARCH_HISTORY_ITEMS,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._key = search_history_key(namespace)
        self._max_items = max_items
        self._clock = clock

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> list[SearchHistoryEntry]:
        stored = decode_or_default(
            safe_get(self._store, self._key), list[Any], [], label="search history"
        )
        entries: list[SearchHistoryEntry] = []
        for item in stored:
            try:
                entries.append(SearchHistoryEntry.model_validate(item))
            except ValidationError as exc:
                logger.warning("Dropping malformed search history entry: %s", exc)
        return entries

    def replace(self, entries: list[SearchHistoryEntry]) -> bool:
        """Overwrite the log with ``entries`` truncated to the bound."""

        return safe_set(self._store, self._key, encode(entries[: self._max_items]))

    def add(self, query: str, result_count: int | None = None) -> None:
        trimmed = query.strip()
        if not trimmed:
            return
        entry = SearchHistoryEntry(query=trimmed, timestamp=self._clock(), result_count=result_count)
        remaining = [existing for existing in self.get() if existing.query != trimmed]
        self.replace([entry, *remaining])

    def remove(self, query: str) -> None:
        history = self.get()
        filtered = [entry for entry in history if entry.query != query]
        if len(filtered) != len(history):
            self.replace(filtered)

    def clear(self) -> None:
        safe_remove(self._store, self._key)

    def queries(self) -> list[str]:
        return [entry.query for entry in self.get()]


__all__ = ["SearchHistoryStore"]
