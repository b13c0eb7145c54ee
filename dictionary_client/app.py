"""Application entry point wiring the state and synchronization layer.

:func:`build_application` constructs every component exactly once and hands
out references; nothing in the package keeps module-level instances. The
resulting :class:`Application` owns the lifecycle: :meth:`Application.start`
applies the stored presentation and starts live sync, and
:meth:`Application.aclose` tears the background work down.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from dictionary_client.services.content_cache import ContentCache
from dictionary_client.services.content_client import ContentClient
from dictionary_client.services.data_transfer import DataTransfer
from dictionary_client.services.developer_console import DeveloperConsoleStore
from dictionary_client.services.favorites import FavoritesStore
from dictionary_client.services.live_sync import (
    LiveSyncChannel,
    PollingUpdateSource,
    select_update_source,
)
from dictionary_client.services.notifier import ChangeNotifier
from dictionary_client.services.preferences import PreferenceStore
from dictionary_client.services.search_history import SearchHistoryStore
from dictionary_client.services.theme import PresentationRoot, ThemeApplier
from dictionary_client.settings import AppSettings, get_settings
from dictionary_client.storage.kv import KeyValueStore, build_key_value_store

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(level=settings.log_level_numeric, format=LOG_FORMAT)


def validate_environment(settings: AppSettings) -> None:
    """Log warnings for optional configuration left at its default."""

    warnings = settings.optional_config_warnings()
    if not warnings:
        return
    logger.warning("=" * 60)
    logger.warning("Environment Configuration Warnings:")
    for warning in warnings:
        logger.warning(f"  • {warning}")
    logger.warning("=" * 60)


@dataclass
class Application:
    settings: AppSettings
    store: KeyValueStore
    presentation: PresentationRoot
    theme: ThemeApplier
    preferences: PreferenceStore
    favorites: FavoritesStore
    search_history: SearchHistoryStore
    developer_console: DeveloperConsoleStore
    data_transfer: DataTransfer
    content_client: ContentClient
    notifier: ChangeNotifier
    content: ContentCache
    live_sync: LiveSyncChannel

    def start(self) -> None:
        """Apply stored display preferences and begin keeping content fresh.

        Must be called from a running event loop; repeated calls are no-ops.
        """

        if self.live_sync.started:
            return
        self.preferences.initialize_presentation()
        self.live_sync.start()

    async def aclose(self) -> None:
        await self.live_sync.aclose()
        await self.content_client.aclose()
        # Only the redis backend holds a connection pool.
        close = getattr(self.store, "close", None)
        if close is not None:
            close()


def build_application(
    settings: AppSettings | None = None,
    *,
    store: KeyValueStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> Application:
    """Construct the full object graph for one process."""

    settings = settings if settings is not None else get_settings()
    store = store if store is not None else build_key_value_store(settings)
    namespace = settings.storage_namespace

    presentation = PresentationRoot()
    theme = ThemeApplier(presentation)
    preferences = PreferenceStore(store, theme, namespace=namespace)
    favorites = FavoritesStore(store, namespace=namespace)
    search_history = SearchHistoryStore(store, namespace=namespace)
    developer_console = DeveloperConsoleStore(store, namespace=namespace)
    data_transfer = DataTransfer(
        store, preferences, search_history, favorites, namespace=namespace
    )

    content_client = ContentClient(settings, http_client=http_client)
    notifier = ChangeNotifier()
    content = ContentCache(content_client, notifier)
    live_sync = LiveSyncChannel(
        content,
        select_update_source(settings, content_client),
        fallback=PollingUpdateSource(settings.poll_interval_seconds),
    )

    return Application(
        settings=settings,
        store=store,
        presentation=presentation,
        theme=theme,
        preferences=preferences,
        favorites=favorites,
        search_history=search_history,
        developer_console=developer_console,
        data_transfer=data_transfer,
        content_client=content_client,
        notifier=notifier,
        content=content,
        live_sync=live_sync,
    )


__all__ = [
    "Application",
    "LOG_FORMAT",
    "build_application",
    "configure_logging",
    "validate_environment",
]
