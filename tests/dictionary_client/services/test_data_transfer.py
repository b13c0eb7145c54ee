"""Tests for exporting, importing and wiping local user data."""

from __future__ import annotations

import json

import pytest

from dictionary_client.services.data_transfer import DataTransfer
from dictionary_client.services.developer_console import DeveloperConsoleStore
from dictionary_client.services.favorites import FavoritesStore
from dictionary_client.services.preferences import PreferenceStore
from dictionary_client.services.search_history import SearchHistoryStore
from dictionary_client.services.theme import PresentationRoot, ThemeApplier
from dictionary_client.storage.kv import MemoryKeyValueStore
from tests.dictionary_client.support.doubles import FixedClock


@pytest.fixture
def transfer(
    store: MemoryKeyValueStore,
    preferences: PreferenceStore,
    search_history: SearchHistoryStore,
    favorites: FavoritesStore,
    clock: FixedClock,
) -> DataTransfer:
    return DataTransfer(store, preferences, search_history, favorites, clock=clock)


def _fresh_transfer(clock: FixedClock) -> tuple[DataTransfer, MemoryKeyValueStore]:
    store = MemoryKeyValueStore()
    preferences = PreferenceStore(store, ThemeApplier(), clock=clock)
    history = SearchHistoryStore(store, clock=clock)
    favorites = FavoritesStore(store)
    return DataTransfer(store, preferences, history, favorites, clock=clock), store


def test_export_document_shape(
    transfer: DataTransfer,
    preferences: PreferenceStore,
    search_history: SearchHistoryStore,
    favorites: FavoritesStore,
) -> None:
    preferences.set({"theme": "dark"})
    search_history.add("sun", result_count=2)
    favorites.add("42")

    document = json.loads(transfer.export_all_data())

    assert set(document) == {"preferences", "searchHistory", "favorites", "exportedAt"}
    assert document["preferences"]["theme"] == "dark"
    assert document["searchHistory"][0]["query"] == "sun"
    assert document["favorites"] == ["42"]
    assert document["exportedAt"] == "2024-01-01T12:00:00Z"


def test_export_then_import_restores_everything(
    transfer: DataTransfer,
    preferences: PreferenceStore,
    search_history: SearchHistoryStore,
    favorites: FavoritesStore,
    clock: FixedClock,
) -> None:
    preferences.set({"theme": "sepia", "font_size": "lg", "sound_volume": 15})
    search_history.add("first")
    search_history.add("second")
    favorites.add("7")
    exported = transfer.export_all_data()

    target, target_store = _fresh_transfer(clock)
    assert target.import_all_data(exported) is True

    restored = PreferenceStore(target_store, ThemeApplier()).get()
    assert (restored.theme, restored.font_size, restored.sound_volume) == ("sepia", "lg", 15)
    assert SearchHistoryStore(target_store).queries() == ["second", "first"]
    assert FavoritesStore(target_store).get() == ["7"]


def test_import_missing_sections_leaves_them_untouched(
    transfer: DataTransfer, favorites: FavoritesStore, search_history: SearchHistoryStore
) -> None:
    favorites.add("1")
    search_history.add("keep")

    assert transfer.import_all_data(json.dumps({"favorites": ["2", "2", "3"]})) is True

    assert favorites.get() == ["2", "3"]
    assert search_history.queries() == ["keep"]


@pytest.mark.parametrize(
    "document",
    [
        "not json",
        json.dumps({"favorites": "oops"}),
        json.dumps({"preferences": {"theme": "neon"}, "favorites": ["9"]}),
        json.dumps({"searchHistory": [{"query": "x"}]}),
    ],
)
def test_import_rejects_invalid_document_without_writing(
    transfer: DataTransfer, favorites: FavoritesStore, document: str
) -> None:
    favorites.add("1")

    assert transfer.import_all_data(document) is False

    assert favorites.get() == ["1"]


def test_clear_all_data_removes_records_and_resets_presentation(
    store: MemoryKeyValueStore,
    transfer: DataTransfer,
    preferences: PreferenceStore,
    search_history: SearchHistoryStore,
    favorites: FavoritesStore,
    presentation: PresentationRoot,
) -> None:
    preferences.set({"theme": "oled", "custom_colors": {"text_color": "#fff"}})
    search_history.add("x")
    favorites.add("1")
    DeveloperConsoleStore(store).increment_tap_count()
    store.set("unrelated", "stays")

    transfer.clear_all_data()

    assert store.keys() == ["unrelated"]
    assert presentation.active_theme == "light"
    assert presentation.style_properties == {}
