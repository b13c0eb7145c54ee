"""Service layer: durable user stores and the content synchronization pipeline.

User data (preferences, favorites, search history, developer console state)
lives in the device key-value store. Server content lives in the
:class:`ContentCache`, kept fresh by the :class:`LiveSyncChannel`.
"""

from .content_cache import ContentCache
from .content_client import ContentClient, ServerSentEvent
from .data_transfer import DataTransfer
from .developer_console import DeveloperConsoleStore
from .favorites import FavoritesStore
from .live_sync import (
    ChannelState,
    LiveSyncChannel,
    PollingUpdateSource,
    PushUpdateSource,
    UpdateSource,
    select_update_source,
)
from .notifier import ChangeNotifier, Subscription
from .preferences import PreferenceStore
from .search_history import SearchHistoryStore
from .theme import PresentationRoot, ThemeApplier

__all__ = [
    "ChangeNotifier",
    "ChannelState",
    "ContentCache",
    "ContentClient",
    "DataTransfer",
    "DeveloperConsoleStore",
    "FavoritesStore",
    "LiveSyncChannel",
    "PollingUpdateSource",
    "PreferenceStore",
    "PresentationRoot",
    "PushUpdateSource",
    "SearchHistoryStore",
    "ServerSentEvent",
    "Subscription",
    "ThemeApplier",
    "UpdateSource",
    "select_update_source",
]
