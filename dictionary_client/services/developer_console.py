"""Developer console unlock state (tap counter and session flag)."""

from __future__ import annotations

import logging

from dictionary_client.schemas.transfer import DeveloperConsoleState
from dictionary_client.settings import DEFAULT_STORAGE_NAMESPACE
from dictionary_client.storage.codec import decode_or_default, encode, safe_get, safe_remove, safe_set
from dictionary_client.storage.keys import developer_console_key
from dictionary_client.storage.kv import KeyValueStore
from dictionary_client.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)

DEFAULT_UNLOCK_TAPS = 7


class DeveloperConsoleStore:
    """Tap counter and session flag gating the hidden developer console.

    The console unlocks once the tap count reaches the threshold. A failed
    write leaves the previous record in place.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        namespace: str = DEFAULT_STORAGE_NAMESPACE,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._key = developer_console_key(namespace)
        self._clock = clock

    def get(self) -> DeveloperConsoleState:
        return decode_or_default(
            safe_get(self._store, self._key),
            DeveloperConsoleState,
            DeveloperConsoleState(),
            label="developer console",
        )

    def get_tap_count(self) -> int:
        return self.get().tap_count

    def increment_tap_count(self) -> int:
        """Record one more tap; returns the new count or 0 if it was not saved."""

        state = self.get()
        updated = state.model_copy(
            update={"tap_count": state.tap_count + 1, "last_tap": self._clock()}
        )
        if not safe_set(self._store, self._key, encode(updated)):
            return 0
        return updated.tap_count

    def reset_tap_count(self) -> None:
        safe_remove(self._store, self._key)

    def set_authenticated(self, is_authenticated: bool) -> None:
        state = self.get()
        updated = state.model_copy(
            update={"is_authenticated": is_authenticated, "last_access": self._clock()}
        )
        safe_set(self._store, self._key, encode(updated))

    def is_authenticated(self) -> bool:
        return self.get().is_authenticated

    def unlocked(self, threshold: int = DEFAULT_UNLOCK_TAPS) -> bool:
        return self.get_tap_count() >= threshold


__all__ = ["DEFAULT_UNLOCK_TAPS", "DeveloperConsoleStore"]
