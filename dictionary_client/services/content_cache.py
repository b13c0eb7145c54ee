"""In-memory mirror of the server-owned words and characters.

The cache holds one immutable :class:`ContentSnapshot` at a time. A
successful :meth:`ContentCache.load` swaps in a new snapshot and notifies
every observer in the same synchronous step, so observers never see a torn
state. A failed load keeps the previous snapshot and stays silent: already
displayed content must not disappear because of a transient fetch error.

Concurrent loads are not serialised. Each load takes a sequence number when
it starts, and a response is discarded when a load that started later has
already been applied, so a slow request cannot overwrite fresher content.
"""

from __future__ import annotations

import logging
from typing import Protocol

from dictionary_client.errors import ContentFetchError
from dictionary_client.schemas.content import (
    CHARACTER_TYPES,
    EMPTY_SNAPSHOT,
    Character,
    ContentSnapshot,
    Word,
)
from dictionary_client.services.notifier import ChangeNotifier, Observer, Subscription

logger = logging.getLogger(__name__)


class ContentSource(Protocol):
    """Backend collaborator returning the full content document."""

    async def fetch_content(self) -> ContentSnapshot:
        ...


def word_matches(word: Word, query: str) -> bool:
    """Return ``True`` when any searchable field of ``word`` contains ``query``.

    Translation, romanization and related terms compare case-insensitively;
    the native script has no case and is compared as-is.
    """

    lowered = query.lower()
    if lowered in word.english_translation.lower():
        return True
    if query in word.chakma_word_script:
        return True
    if lowered in word.romanized_pronunciation.lower():
        return True
    return any(lowered in term.term.lower() for term in (*word.synonyms, *word.antonyms))


class ContentCache:
    """Owner and sole writer of the current content snapshot."""

    def __init__(self, source: ContentSource, notifier: ChangeNotifier | None = None) -> None:
        self._source = source
        self._notifier = notifier if notifier is not None else ChangeNotifier()
        self._snapshot: ContentSnapshot = EMPTY_SNAPSHOT
        self._started_loads = 0
        self._applied_load = 0

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def snapshot(self) -> ContentSnapshot:
        return self._snapshot

    @property
    def version(self) -> int:
        return self._snapshot.version

    def subscribe(self, observer: Observer) -> Subscription:
        """Register ``observer`` for refresh notifications; call the handle to stop."""

        return self._notifier.subscribe(observer)

    async def load(self) -> bool:
        """Reload the full content document.

        Returns ``True`` when a new snapshot was applied and observers were
        notified, ``False`` when the fetch failed or its response was stale.
        """

        self._started_loads += 1
        sequence = self._started_loads
        try:
            snapshot = await self._source.fetch_content()
        except ContentFetchError as exc:
            logger.error("Failed to load content: %s", exc)
            return False

        if sequence < self._applied_load:
            logger.info(
                "Discarding stale content response (load %s finished after load %s)",
                sequence,
                self._applied_load,
            )
            return False

        # No await between the swap and the fan-out.
        self._snapshot = snapshot
        self._applied_load = sequence
        logger.debug(
            "Content snapshot v%s applied (%s words, %s characters)",
            snapshot.version,
            len(snapshot.words),
            len(snapshot.characters),
        )
        self._notifier.notify()
        return True

    def get_words(self) -> list[Word]:
        return list(self._snapshot.words)

    def get_characters(self) -> list[Character]:
        return list(self._snapshot.characters)

    def get_characters_by_type(self) -> dict[str, list[Character]]:
        """Partition characters by type tag; every known tag is present."""

        partitions: dict[str, list[Character]] = {tag: [] for tag in CHARACTER_TYPES}
        for character in self._snapshot.characters:
            bucket = partitions.get(character.character_type)
            if bucket is not None:
                bucket.append(character)
        return partitions

    def get_word_by_id(self, word_id: str) -> Word | None:
        for word in self._snapshot.words:
            if word.id == word_id:
                return word
        return None

    def search_words_local(self, query: str) -> list[Word]:
        """Return words matching ``query`` in snapshot order."""

        return [word for word in self._snapshot.words if word_matches(word, query)]


__all__ = ["ContentCache", "ContentSource", "word_matches"]
