"""Test doubles standing in for the device store, the clock and the backend."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from datetime import datetime, timedelta, timezone

from dictionary_client.errors import StorageError
from dictionary_client.schemas.content import Character, ContentSnapshot, RelatedTerm, Word
from dictionary_client.services.content_client import ServerSentEvent
from dictionary_client.storage.kv import MemoryKeyValueStore


class FixedClock:
    """Deterministic clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


class FailingStore(MemoryKeyValueStore):
    """Store double emulating a disabled or full device store."""

    def __init__(
        self,
        initial: dict[str, str] | None = None,
        *,
        fail_reads: bool = False,
        fail_writes: bool = True,
    ) -> None:
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("read", key, "storage disabled")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("write", key, "quota exceeded")
        super().set(key, value)

    def remove(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError("remove", key, "quota exceeded")
        super().remove(key)


class ScriptedContentSource:
    """Backend double returning queued snapshots or raising queued errors.

    An entry may carry an :class:`asyncio.Event`; the fetch then waits for it,
    which lets tests control the order in which concurrent loads finish.
    """

    def __init__(self) -> None:
        self._queue: list[tuple[ContentSnapshot | Exception, asyncio.Event | None]] = []
        self.calls = 0

    def push(
        self, outcome: ContentSnapshot | Exception, *, gate: asyncio.Event | None = None
    ) -> None:
        self._queue.append((outcome, gate))

    async def fetch_content(self) -> ContentSnapshot:
        self.calls += 1
        outcome, gate = self._queue.pop(0)
        if gate is not None:
            await gate.wait()
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class ScriptedEventStream:
    """Push channel double: each connection replays one scripted outcome.

    An outcome is either a list of events (the connection opens, yields them
    and then closes) or an exception raised while connecting. Once the script
    runs out, further connections block until cancelled.
    """

    def __init__(self, *connections: list[ServerSentEvent] | Exception) -> None:
        self._connections = list(connections)
        self.attempts = 0

    async def stream_events(
        self, on_open: Callable[[], None] | None = None
    ) -> AsyncIterator[ServerSentEvent]:
        self.attempts += 1
        if not self._connections:
            await asyncio.Event().wait()
            return
        outcome = self._connections.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if on_open is not None:
            on_open()
        for event in outcome:
            yield event


class StopLoop(Exception):
    """Raised by :class:`RecordingSleep` to break out of endless source loops."""


class RecordingSleep:
    """Replacement for ``asyncio.sleep`` recording delays.

    After ``allowed`` calls it raises :class:`StopLoop` so tests can run an
    update source for a fixed number of iterations.
    """

    def __init__(self, allowed: int = 0) -> None:
        self.allowed = allowed
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if len(self.delays) > self.allowed:
            raise StopLoop()
        await asyncio.sleep(0)


def make_word(
    word_id: str,
    *,
    script: str = "",
    romanized: str = "",
    translation: str = "",
    synonyms: tuple[str, ...] = (),
    antonyms: tuple[str, ...] = (),
) -> Word:
    return Word(
        id=word_id,
        chakma_word_script=script,
        romanized_pronunciation=romanized,
        english_translation=translation,
        synonyms=tuple(RelatedTerm(term=term) for term in synonyms),
        antonyms=tuple(RelatedTerm(term=term) for term in antonyms),
    )


def make_character(character_id: str, character_type: str, script: str = "") -> Character:
    return Character(id=character_id, character_script=script, character_type=character_type)


def make_snapshot(version: int, *words: Word, characters: tuple[Character, ...] = ()) -> ContentSnapshot:
    return ContentSnapshot(words=words, characters=characters, version=version)
