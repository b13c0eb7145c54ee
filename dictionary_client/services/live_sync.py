"""Keep the content cache fresh for the lifetime of the process.

A :class:`LiveSyncChannel` drives one :class:`UpdateSource`. Two sources
exist: :class:`PushUpdateSource` listens to the server-sent event stream and
:class:`PollingUpdateSource` reloads on a fixed interval. The source is chosen
at construction time; if the push endpoint turns out not to exist, the
channel switches to polling for good.

Every update signal results in a full :meth:`ContentCache.load`; event
payloads are never diffed against the snapshot.

State machine::

    UNINITIALIZED -> CONNECTING -> CONNECTED
                       ^              |
                       +--- error ----+
    UNINITIALIZED -> POLLING              (push disabled or unavailable)
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable, Coroutine
from enum import Enum
from typing import Any, Protocol

import httpx

from dictionary_client.errors import ChannelUnavailableError
from dictionary_client.services.content_cache import ContentCache
from dictionary_client.services.content_client import ServerSentEvent
from dictionary_client.settings import DEFAULT_POLL_INTERVAL_SECONDS, AppSettings

logger = logging.getLogger(__name__)

CONTENT_UPDATED_EVENT = "content_updated"
DEFAULT_PUSH_RETRY_SECONDS = 3.0


def _is_empty_payload(payload: Any) -> bool:
    # Objects and arrays count as payloads even when empty.
    if isinstance(payload, (dict, list)):
        return False
    return payload is None or payload is False or payload == 0 or payload == ""


UpdateCallback = Callable[[], Awaitable[None]]
Sleep = Callable[[float], Awaitable[None]]


class ChannelState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    POLLING = "polling"


StateCallback = Callable[[ChannelState], None]


class EventStreamSource(Protocol):
    """Anything able to open the content-update event stream."""

    def stream_events(
        self, on_open: Callable[[], None] | None = None
    ) -> AsyncIterator[ServerSentEvent]:
        ...


class UpdateSource(ABC):
    """Producer of "content changed" signals."""

    name: str = "update source"

    @abstractmethod
    async def run(self, on_update: UpdateCallback, on_state: StateCallback) -> None:
        """Emit signals through ``on_update`` until cancelled."""


class PushUpdateSource(UpdateSource):
    """Reload whenever the server announces a content update.

    Dropped connections are re-established after ``retry_delay`` seconds (or
    the delay the server requested with a ``retry`` field). A server without
    an event stream raises :class:`ChannelUnavailableError` out of :meth:`run`.
    """

    name = "push channel"

    def __init__(
        self,
        stream: EventStreamSource,
        *,
        retry_delay: float = DEFAULT_PUSH_RETRY_SECONDS,
        event_name: str = CONTENT_UPDATED_EVENT,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._stream = stream
        self._retry_delay = retry_delay
        self._event_name = event_name
        self._sleep = sleep

    async def run(self, on_update: UpdateCallback, on_state: StateCallback) -> None:
        while True:
            on_state(ChannelState.CONNECTING)
            try:
                async for event in self._stream.stream_events(
                    on_open=lambda: on_state(ChannelState.CONNECTED)
                ):
                    await self._handle(event, on_update)
                logger.info("Push channel closed by server; reconnecting")
            except httpx.HTTPError as exc:
                logger.warning("Push channel error: %s", exc)
            on_state(ChannelState.CONNECTING)
            await self._sleep(self._retry_delay)

    async def _handle(self, event: ServerSentEvent, on_update: UpdateCallback) -> None:
        if event.retry is not None:
            self._retry_delay = event.retry / 1000
        if event.event != self._event_name:
            logger.debug("Ignoring %s event", event.event)
            return
        try:
            payload = json.loads(event.data or "{}")
        except ValueError as exc:
            logger.error("Failed to process push event: %s", exc)
            return
        if _is_empty_payload(payload):
            logger.debug("Ignoring empty %s payload", event.event)
            return
        await on_update()


class PollingUpdateSource(UpdateSource):
    """Signal an update every ``interval`` seconds, forever."""

    name = "polling"

    def __init__(
        self,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.interval = interval
        self._sleep = sleep

    async def run(self, on_update: UpdateCallback, on_state: StateCallback) -> None:
        on_state(ChannelState.POLLING)
        while True:
            await self._sleep(self.interval)
            await on_update()


def select_update_source(settings: AppSettings, stream: EventStreamSource) -> UpdateSource:
    """Pick the push source when the runtime allows it, polling otherwise."""

    if settings.push_enabled:
        return PushUpdateSource(stream, retry_delay=settings.push_retry_seconds)
    logger.info("Push channel disabled; polling every %.1fs", settings.poll_interval_seconds)
    return PollingUpdateSource(settings.poll_interval_seconds)


class LiveSyncChannel:
    """Process-lifetime driver connecting an update source to the cache."""

    def __init__(
        self,
        cache: ContentCache,
        source: UpdateSource,
        *,
        fallback: UpdateSource | None = None,
    ) -> None:
        self._cache = cache
        self._source = source
        self._fallback = fallback if fallback is not None else PollingUpdateSource()
        self._state = ChannelState.UNINITIALIZED
        self._started = False
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def state(self) -> ChannelState:
        return self._state

    @property
    def source(self) -> UpdateSource:
        return self._source

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> bool:
        """Schedule the initial load and the update source on the running loop.

        Only the first call has any effect; it returns ``True``. Raises
        ``RuntimeError`` when called outside a running event loop.
        """

        asyncio.get_running_loop()
        if self._started:
            logger.debug("Live sync already started; ignoring repeated start")
            return False
        self._started = True
        self._spawn(self._reload(), name="content-initial-load")
        self._spawn(self._run(), name="content-live-sync")
        logger.info("Live sync started using %s", self._source.name)
        return True

    async def aclose(self) -> None:
        """Cancel background work; used at interpreter shutdown and in tests."""

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    def _set_state(self, state: ChannelState) -> None:
        if state is not self._state:
            logger.debug("Live sync state %s -> %s", self._state.value, state.value)
        self._state = state

    async def _run(self) -> None:
        try:
            await self._source.run(self._reload, self._set_state)
        except ChannelUnavailableError as exc:
            logger.warning("Push channel unavailable (%s); falling back to polling", exc)
            self._source = self._fallback
            await self._fallback.run(self._reload, self._set_state)

    async def _reload(self) -> None:
        try:
            await self._cache.load()
        except Exception:  # type: ignore[broad-except]
            logger.exception("Content reload failed")

    def _spawn(self, coro: Coroutine[Any, Any, None], *, name: str) -> None:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Live sync task %s stopped: %r", task.get_name(), exc)


__all__ = [
    "CONTENT_UPDATED_EVENT",
    "ChannelState",
    "EventStreamSource",
    "LiveSyncChannel",
    "PollingUpdateSource",
    "PushUpdateSource",
    "UpdateSource",
    "select_update_source",
]
