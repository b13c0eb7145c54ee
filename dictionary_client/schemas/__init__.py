"""Pydantic schemas for persisted user data and mirrored server content."""

from .content import (
    CHARACTER_TYPES,
    EMPTY_SNAPSHOT,
    Character,
    CharacterType,
    ContentDocument,
    ContentEnvelope,
    ContentSnapshot,
    RelatedTerm,
    Word,
)
from .history import MAX_SEARCH_HISTORY_ITEMS, SearchHistoryEntry
from .preferences import (
    DEFAULT_USER_PREFERENCES,
    FONT_SIZES,
    THEME_MODES,
    CustomColors,
    FontSize,
    PreferencesUpdate,
    ThemeMode,
    UserPreferences,
    clamp_volume,
)
from .transfer import DeveloperConsoleState, ExportBundle

__all__ = [
    "CHARACTER_TYPES",
    "Character",
    "CharacterType",
    "ContentDocument",
    "ContentEnvelope",
    "ContentSnapshot",
    "CustomColors",
    "DEFAULT_USER_PREFERENCES",
    "DeveloperConsoleState",
    "EMPTY_SNAPSHOT",
    "ExportBundle",
    "FONT_SIZES",
    "FontSize",
    "MAX_SEARCH_HISTORY_ITEMS",
    "PreferencesUpdate",
    "RelatedTerm",
    "SearchHistoryEntry",
    "THEME_MODES",
    "ThemeMode",
    "UserPreferences",
    "Word",
    "clamp_volume",
]
