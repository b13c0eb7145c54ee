"""Export, import and wipe all locally stored user data."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from dictionary_client.schemas.preferences import PreferencesUpdate
from dictionary_client.schemas.transfer import ExportBundle
from dictionary_client.services.favorites import FavoritesStore
from dictionary_client.services.preferences import PreferenceStore
from dictionary_client.services.search_history import SearchHistoryStore
from dictionary_client.settings import DEFAULT_STORAGE_NAMESPACE
from dictionary_client.storage.codec import encode, safe_remove
from dictionary_client.storage.keys import all_keys
from dictionary_client.storage.kv import KeyValueStore
from dictionary_client.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)


class DataTransfer:
    """Move the user's preferences, history and favorites in and out.

    The export document is ``{preferences, searchHistory, favorites,
    exportedAt}``. Imports are validated in full before anything is written,
    so a malformed file is rejected without partially overwriting state.
    """

    def __init__(
        self,
        store: KeyValueStore,
        preferences: PreferenceStore,
        history: SearchHistoryStore,
        favorites: FavoritesStore,
        *,
        namespace: str = DEFAULT_STORAGE_NAMESPACE,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._preferences = preferences
        self._history = history
        self._favorites = favorites
        self._namespace = namespace
        self._clock = clock

    def export_all_data(self) -> str:
        bundle = ExportBundle(
            preferences=self._preferences.get().model_dump(mode="json"),
            search_history=self._history.get(),
            favorites=self._favorites.get(),
            exported_at=self._clock(),
        )
        return encode(bundle.model_dump(mode="json", by_alias=True), indent=2)

    def import_all_data(self, serialized: str) -> bool:
        """Restore a document produced by :meth:`export_all_data`.

        Sections that are absent from the document are left as they are.
        """

        try:
            bundle = ExportBundle.model_validate_json(serialized)
            update = (
                PreferencesUpdate.model_validate(bundle.preferences)
                if bundle.preferences is not None
                else None
            )
        except ValidationError as exc:
            logger.error("Error importing data: %s", exc)
            return False

        succeeded = True
        if update is not None:
            succeeded = self._preferences.set(update) and succeeded
        if bundle.search_history is not None:
            succeeded = self._history.replace(bundle.search_history) and succeeded
        if bundle.favorites is not None:
            succeeded = self._favorites.replace(bundle.favorites) and succeeded
        return succeeded

    def clear_all_data(self) -> None:
        """Remove every record this application owns and reset the presentation."""

        for key in all_keys(self._namespace):
            safe_remove(self._store, key)
        self._preferences.reset()
        logger.info("Cleared all local data")


__all__ = ["DataTransfer"]
