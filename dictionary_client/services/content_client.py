"""HTTP collaborator for the dictionary REST service.

Two endpoints matter to the synchronization layer: the content document,
fetched in full on every reload, and the server-sent event stream announcing
that the content changed. Both are reached through one shared
``httpx.AsyncClient``; the event stream is decoded by ``httpx-sse``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable

import httpx
from httpx_sse import ServerSentEvent, aconnect_sse
from pydantic import ValidationError

from dictionary_client.errors import ChannelUnavailableError, ContentFetchError
from dictionary_client.schemas.content import ContentEnvelope, ContentSnapshot
from dictionary_client.settings import AppSettings

logger = logging.getLogger(__name__)

EVENT_STREAM_CONTENT_TYPE = "text/event-stream"
# Statuses meaning the server has no event stream at all, as opposed to a
# transient failure worth reconnecting after.
_UNSUPPORTED_STREAM_STATUSES = frozenset({404, 405, 501})


class ContentClient:
    """Fetch the content document and open the content-update event stream."""

    def __init__(
        self,
        settings: AppSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=settings.request_timeout_seconds
        )

    async def fetch_content(self) -> ContentSnapshot:
        """Return the full content document as a snapshot.

        Raises :class:`ContentFetchError` on transport failures, non-2xx
        responses, undecodable bodies, and envelopes reporting failure.
        """

        url = self._settings.content_url
        try:
            response = await self._client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise ContentFetchError(f"Request to {url} failed: {exc}") from exc

        if response.is_error:
            raise ContentFetchError(
                f"Request failed: {response.status_code}", status_code=response.status_code
            )

        try:
            envelope = ContentEnvelope.model_validate_json(response.content)
        except ValidationError as exc:
            raise ContentFetchError(f"Malformed content document: {exc}") from exc

        if not envelope.success or envelope.data is None:
            raise ContentFetchError(envelope.error or "Content endpoint reported failure")

        return ContentSnapshot.from_document(envelope.data)

    async def stream_events(
        self, on_open: Callable[[], None] | None = None
    ) -> AsyncIterator[ServerSentEvent]:
        """Yield events from the push channel until the server closes it.

        ``on_open`` is called once the server has accepted the stream.
        Raises :class:`ChannelUnavailableError` when the server does not offer
        an event stream and ``httpx.HTTPError`` on transient failures.
        """

        url = self._settings.events_url
        timeout = httpx.Timeout(self._settings.request_timeout_seconds, read=None)
        async with aconnect_sse(self._client, "GET", url, timeout=timeout) as event_source:
            response = event_source.response
            if response.status_code in _UNSUPPORTED_STREAM_STATUSES:
                raise ChannelUnavailableError(
                    f"{url} does not provide an event stream ({response.status_code})"
                )
            response.raise_for_status()
            content_type = response.headers.get("content-type", "")
            if not content_type.startswith(EVENT_STREAM_CONTENT_TYPE):
                raise ChannelUnavailableError(
                    f"{url} answered with {content_type or 'no content type'}"
                )
            if on_open is not None:
                on_open()
            async for event in event_source.aiter_sse():
                yield event

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "ContentClient",
    "EVENT_STREAM_CONTENT_TYPE",
    "ServerSentEvent",
]
