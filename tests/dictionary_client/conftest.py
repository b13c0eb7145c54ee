"""Shared fixtures wiring the user-data stores over an in-memory device store."""

from __future__ import annotations

import pytest

from dictionary_client.services.favorites import FavoritesStore
from dictionary_client.services.preferences import PreferenceStore
from dictionary_client.services.search_history import SearchHistoryStore
from dictionary_client.services.theme import PresentationRoot, ThemeApplier
from dictionary_client.storage.kv import MemoryKeyValueStore
from tests.dictionary_client.support.doubles import FixedClock


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def presentation() -> PresentationRoot:
    return PresentationRoot()


@pytest.fixture
def theme(presentation: PresentationRoot) -> ThemeApplier:
    return ThemeApplier(presentation)


@pytest.fixture
def preferences(store: MemoryKeyValueStore, theme: ThemeApplier, clock: FixedClock) -> PreferenceStore:
    return PreferenceStore(store, theme, clock=clock)


@pytest.fixture
def favorites(store: MemoryKeyValueStore) -> FavoritesStore:
    return FavoritesStore(store)


@pytest.fixture
def search_history(store: MemoryKeyValueStore, clock: FixedClock) -> SearchHistoryStore:
    return SearchHistoryStore(store, clock=clock)
