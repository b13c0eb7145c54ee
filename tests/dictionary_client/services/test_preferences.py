"""Tests for the durable preference store and its presentation side effects."""

from __future__ import annotations

import json
import logging
import math

import pytest

from dictionary_client.schemas.preferences import (
    DEFAULT_USER_PREFERENCES,
    CustomColors,
    PreferencesUpdate,
    clamp_volume,
)
from dictionary_client.services.preferences import PreferenceStore
from dictionary_client.services.theme import PresentationRoot, ThemeApplier
from dictionary_client.storage.kv import MemoryKeyValueStore
from tests.dictionary_client.support.doubles import FailingStore, FixedClock


def _stored(store: MemoryKeyValueStore, preferences: PreferenceStore) -> dict:
    raw = store.get(preferences.key)
    assert raw is not None
    return json.loads(raw)


def test_get_returns_defaults_when_nothing_stored(preferences: PreferenceStore) -> None:
    result = preferences.get()

    assert result == DEFAULT_USER_PREFERENCES
    assert result.theme == "light"
    assert result.font_size == "base"
    assert result.sound_volume == 70


def test_get_returns_defaults_for_unparsable_record(
    store: MemoryKeyValueStore,
    preferences: PreferenceStore,
    caplog: pytest.LogCaptureFixture,
) -> None:
    store.set(preferences.key, "{not json")

    with caplog.at_level(logging.ERROR):
        result = preferences.get()

    assert result == DEFAULT_USER_PREFERENCES
    assert "preferences" in caplog.text


def test_get_merges_partial_record_over_defaults(
    store: MemoryKeyValueStore, preferences: PreferenceStore
) -> None:
    store.set(preferences.key, json.dumps({"theme": "dark"}))

    result = preferences.get()

    assert result.theme == "dark"
    assert result.font_size == "base"
    assert result.sound_volume == 70


def test_get_skips_invalid_fields_but_keeps_valid_ones(
    store: MemoryKeyValueStore, preferences: PreferenceStore
) -> None:
    store.set(
        preferences.key,
        json.dumps({"theme": "neon", "font_size": "lg", "sound_volume": 500}),
    )

    result = preferences.get()

    assert result.theme == "light"
    assert result.font_size == "lg"
    assert result.sound_volume == 100


def test_set_merges_and_stamps_last_updated(
    store: MemoryKeyValueStore,
    preferences: PreferenceStore,
    clock: FixedClock,
) -> None:
    assert preferences.set({"theme": "dark"}) is True
    clock.advance(60)
    assert preferences.set(PreferencesUpdate(font_size="xl")) is True

    result = preferences.get()
    assert result.theme == "dark"
    assert result.font_size == "xl"
    assert result.last_updated == clock.now
    assert _stored(store, preferences)["font_size"] == "xl"


def test_set_applies_only_changed_aspects(
    preferences: PreferenceStore, presentation: PresentationRoot
) -> None:
    presentation.body_classes.add("font-size-sm")

    preferences.set({"theme": "oled"})

    assert presentation.active_theme == "oled"
    assert presentation.body_classes == {"font-size-sm"}
    assert presentation.style_properties == {}


@pytest.mark.parametrize(
    ("requested", "expected"),
    [
        (150, 100),
        (-20, 0),
        (55.6, 56),
        (math.inf, 100),
        (-math.inf, 0),
        ("42", 42),
    ],
)
def test_set_volume_clamps(
    preferences: PreferenceStore, requested: float, expected: int
) -> None:
    assert preferences.set_volume(requested) == expected
    assert preferences.get_volume() == expected


def test_set_volume_rejects_non_numbers(preferences: PreferenceStore) -> None:
    preferences.set_volume(30)

    assert preferences.set_volume(math.nan) == 30
    assert preferences.set_volume("loud") == 30  # type: ignore[arg-type]
    assert preferences.get_volume() == 30


def test_clamp_volume_rejects_booleans() -> None:
    with pytest.raises(ValueError):
        clamp_volume(True)


def test_set_rejects_unknown_theme(
    store: MemoryKeyValueStore,
    preferences: PreferenceStore,
    presentation: PresentationRoot,
) -> None:
    assert preferences.set({"theme": "neon"}) is False

    assert store.get(preferences.key) is None
    assert presentation.root_classes == set()


def test_failed_write_is_a_noop(clock: FixedClock) -> None:
    presentation = PresentationRoot()
    preferences = PreferenceStore(FailingStore(), ThemeApplier(presentation), clock=clock)

    assert preferences.set({"theme": "dark", "font_size": "lg"}) is False

    assert preferences.get() == DEFAULT_USER_PREFERENCES
    assert presentation.active_theme == "light"
    assert presentation.body_classes == set()


def test_set_volume_reports_stored_value_when_write_fails(clock: FixedClock) -> None:
    store = FailingStore({"chakmalex_user_preferences": json.dumps({"sound_volume": 40})})
    preferences = PreferenceStore(store, ThemeApplier(), clock=clock)

    assert preferences.set_volume(10) == 40
    assert preferences.get_volume() == 40


def test_custom_colors_persist_and_apply(
    preferences: PreferenceStore, presentation: PresentationRoot
) -> None:
    preferences.set({"theme": "sepia", "custom_colors": {"text_color": "#222222"}})

    assert preferences.get().custom_colors == CustomColors(text_color="#222222")
    assert presentation.style_properties == {"--foreground": "#222222"}
    assert presentation.active_theme == "sepia"


def test_clearing_custom_colors_restores_theme(
    preferences: PreferenceStore, presentation: PresentationRoot
) -> None:
    preferences.set({"theme": "warm", "custom_colors": {"background_color": "#000000"}})

    assert preferences.set({"custom_colors": None}) is True

    assert preferences.get().custom_colors is None
    assert presentation.style_properties == {}
    assert presentation.active_theme == "warm"


def test_reset_custom_colors_keeps_stored_overrides(
    preferences: PreferenceStore, presentation: PresentationRoot
) -> None:
    preferences.set({"theme": "dark", "custom_colors": {"screen_color": "#101010"}})

    preferences.reset_custom_colors()

    assert presentation.style_properties == {}
    assert presentation.active_theme == "dark"
    assert preferences.get().custom_colors == CustomColors(screen_color="#101010")


def test_export_import_round_trip(
    store: MemoryKeyValueStore, theme: ThemeApplier, clock: FixedClock
) -> None:
    source = PreferenceStore(store, theme, clock=clock)
    source.set({"theme": "vibrant", "font_size": "2xl", "sound_volume": 12})
    exported = source.export_preferences()

    target = PreferenceStore(MemoryKeyValueStore(), ThemeApplier(), clock=clock)
    assert target.import_preferences(exported) is True

    imported = target.get()
    assert (imported.theme, imported.font_size, imported.sound_volume) == ("vibrant", "2xl", 12)
    assert "\n  " in exported


@pytest.mark.parametrize("document", ["{oops", "[1, 2]", '{"font_size": "huge"}'])
def test_import_rejects_malformed_documents(
    store: MemoryKeyValueStore, preferences: PreferenceStore, document: str
) -> None:
    preferences.set({"theme": "dark"})
    before = store.get(preferences.key)

    assert preferences.import_preferences(document) is False

    assert store.get(preferences.key) == before


def test_initialize_presentation_applies_stored_record(
    store: MemoryKeyValueStore, preferences: PreferenceStore, presentation: PresentationRoot
) -> None:
    store.set(
        preferences.key,
        json.dumps(
            {"theme": "dark", "font_size": "sm", "custom_colors": {"ui_buttons_color": "#00ff00"}}
        ),
    )

    applied = preferences.initialize_presentation()

    assert applied.theme == "dark"
    assert presentation.active_theme == "dark"
    assert presentation.body_classes == {"font-size-sm"}
    assert presentation.style_properties == {"--primary": "#00ff00"}


def test_reset_restores_defaults(
    store: MemoryKeyValueStore, preferences: PreferenceStore, presentation: PresentationRoot
) -> None:
    preferences.set({"theme": "oled", "font_size": "3xl", "custom_colors": {"text_color": "#fff"}})

    assert preferences.reset() is True

    assert store.get(preferences.key) is None
    assert preferences.get() == DEFAULT_USER_PREFERENCES
    assert presentation.active_theme == "light"
    assert presentation.body_classes == {"font-size-base"}
    assert presentation.style_properties == {}
