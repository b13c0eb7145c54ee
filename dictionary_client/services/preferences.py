"""Typed, durable user preferences with presentation side effects."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from dictionary_client.schemas.preferences import (
    DEFAULT_USER_PREFERENCES,
    PreferencesUpdate,
    UserPreferences,
    clamp_volume,
)
from dictionary_client.services.theme import ThemeApplier
from dictionary_client.settings import DEFAULT_STORAGE_NAMESPACE
from dictionary_client.storage.codec import decode_or_default, encode, safe_get, safe_remove, safe_set
from dictionary_client.storage.keys import preferences_key
from dictionary_client.storage.kv import KeyValueStore
from dictionary_client.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Persist display and audio preferences and apply them as they change.

    Reads never fail: a missing record yields the defaults, and a damaged one
    yields the defaults merged with whichever stored fields still validate.
    Writes merge the supplied fields over the current record, stamp
    ``last_updated``, persist, and then re-apply only the aspects that were
    part of the update.
    """

    def __init__(
        self,
        store: KeyValueStore,
        theme: ThemeApplier,
        *,
        namespace: str = DEFAULT_STORAGE_NAMESPACE,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._theme = theme
        self._key = preferences_key(namespace)
        self._clock = clock

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> UserPreferences:
        """Return the stored preferences merged field-by-field over defaults."""

        stored = decode_or_default(
            safe_get(self._store, self._key), dict[str, Any], None, label="preferences"
        )
        if stored is None:
            return DEFAULT_USER_PREFERENCES.model_copy()

        merged = DEFAULT_USER_PREFERENCES.model_dump()
        for name in UserPreferences.model_fields:
            if name not in stored:
                continue
            candidate = {**merged, name: stored[name]}
            try:
                validated = UserPreferences.model_validate(candidate)
            except ValidationError as exc:
                logger.warning("Ignoring stored preference %s: %s", name, exc.errors()[0]["msg"])
                continue
            merged[name] = getattr(validated, name)
        return UserPreferences.model_validate(merged)

    def set(self, partial: PreferencesUpdate | Mapping[str, Any]) -> bool:
        """Merge ``partial`` into the stored record and apply what changed.

        Returns ``False`` without touching the store or the presentation when
        ``partial`` fails validation or the write does not go through.
        """

        try:
            update = (
                partial
                if isinstance(partial, PreferencesUpdate)
                else PreferencesUpdate.model_validate(partial)
            )
        except ValidationError as exc:
            logger.error("Rejected preference update: %s", exc)
            return False

        changes = update.changes()
        merged = UserPreferences.model_validate(
            {**self.get().model_dump(), **changes, "last_updated": self._clock()}
        )
        if not safe_set(self._store, self._key, encode(merged)):
            return False

        if update.theme is not None:
            self._theme.apply_theme(update.theme)
        if update.font_size is not None:
            self._theme.apply_font_size(update.font_size)
        if "custom_colors" in changes:
            if update.custom_colors is not None:
                self._theme.apply_custom_colors(update.custom_colors)
            else:
                self._theme.reset_custom_colors(merged.theme)
        return True

    def get_volume(self) -> int:
        return self.get().sound_volume

    def set_volume(self, volume: float) -> int:
        """Persist ``volume`` clamped into ``[0, 100]`` and return the stored value."""

        try:
            clamped = clamp_volume(volume)
        except ValueError as exc:
            logger.error("Rejected volume %r: %s", volume, exc)
            return self.get_volume()
        if not self.set(PreferencesUpdate(sound_volume=clamped)):
            return self.get_volume()
        return clamped

    def reset_custom_colors(self) -> None:
        """Restore the colours of the currently stored theme."""

        self._theme.reset_custom_colors(self.get().theme)

    def reset(self) -> bool:
        """Forget the stored record and re-apply the default presentation."""

        removed = safe_remove(self._store, self._key)
        defaults = DEFAULT_USER_PREFERENCES
        self._theme.reset_custom_colors(defaults.theme)
        self._theme.apply_font_size(defaults.font_size)
        return removed

    def initialize_presentation(self) -> UserPreferences:
        """Apply the stored theme, font size and colours at start-up."""

        preferences = self.get()
        self._theme.apply_theme(preferences.theme)
        self._theme.apply_font_size(preferences.font_size)
        if preferences.custom_colors is not None:
            self._theme.apply_custom_colors(preferences.custom_colors)
        return preferences

    def export_preferences(self) -> str:
        """Return the current record as an indented JSON document."""

        return encode(self.get(), indent=2)

    def import_preferences(self, serialized: str) -> bool:
        """Apply a document produced by :meth:`export_preferences`.

        Malformed documents are rejected with ``False``; the stored record is
        left untouched.
        """

        try:
            payload = json.loads(serialized)
        except (TypeError, ValueError) as exc:
            logger.error("Error importing preferences: %s", exc)
            return False
        if not isinstance(payload, dict):
            logger.error("Error importing preferences: expected a JSON object")
            return False
        return self.set(payload)


__all__ = ["PreferenceStore"]
