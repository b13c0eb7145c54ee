"""Pydantic schemas describing the persisted user preference record."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

ThemeMode = Literal["light", "dark", "oled", "sepia", "warm", "vibrant"]
FontSize = Literal["xs", "sm", "base", "lg", "xl", "2xl", "3xl"]

THEME_MODES: tuple[str, ...] = get_args(ThemeMode)
FONT_SIZES: tuple[str, ...] = get_args(FontSize)

MIN_SOUND_VOLUME = 0
MAX_SOUND_VOLUME = 100
DEFAULT_SOUND_VOLUME = 70


def clamp_volume(value: Any) -> int:
    """Coerce ``value`` into an integer volume within ``[0, 100]``.

    Booleans and non-numeric strings are rejected; infinities clamp to the
    nearest bound.
    """

    if isinstance(value, bool):
        raise ValueError("sound_volume must be a number")
    try:
        numeric = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("sound_volume must be a number") from exc
    if math.isnan(numeric):
        raise ValueError("sound_volume must be a number")
    if math.isinf(numeric):
        return MAX_SOUND_VOLUME if numeric > 0 else MIN_SOUND_VOLUME
    return max(MIN_SOUND_VOLUME, min(MAX_SOUND_VOLUME, round(numeric)))


class CustomColors(BaseModel):
    """Optional per-slot colour overrides layered over the active theme."""

    model_config = ConfigDict(extra="ignore")

    text_color: str | None = Field(None, description="Foreground text colour.")
    ui_buttons_color: str | None = Field(None, description="Primary button colour.")
    screen_color: str | None = Field(None, description="Card/screen surface colour.")
    background_color: str | None = Field(None, description="Page background colour.")


class UserPreferences(BaseModel):
    """Complete preference record as returned by the preference store."""

    model_config = ConfigDict(extra="ignore")

    theme: ThemeMode = "light"
    font_size: FontSize = "base"
    sound_volume: int = DEFAULT_SOUND_VOLUME
    custom_colors: CustomColors | None = None
    last_updated: datetime | None = None

    @field_validator("sound_volume", mode="before")
    @classmethod
    def _clamp_sound_volume(cls, value: Any) -> int:
        return clamp_volume(value)


class PreferencesUpdate(BaseModel):
    """Partial update payload; only explicitly supplied fields are applied."""

    model_config = ConfigDict(extra="ignore")

    theme: ThemeMode | None = None
    font_size: FontSize | None = None
    sound_volume: int | None = None
    custom_colors: CustomColors | None = None

    @field_validator("sound_volume", mode="before")
    @classmethod
    def _clamp_sound_volume(cls, value: Any) -> int | None:
        if value is None:
            return None
        return clamp_volume(value)

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields, dropping ``None`` for non-nullable ones.

        ``custom_colors`` is the only nullable preference, so an explicit
        ``None`` there is kept and means "clear the overrides".
        """

        supplied = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in supplied.items()
            if value is not None or name == "custom_colors"
        }


DEFAULT_USER_PREFERENCES = UserPreferences()

__all__ = [
    "CustomColors",
    "DEFAULT_SOUND_VOLUME",
    "DEFAULT_USER_PREFERENCES",
    "FONT_SIZES",
    "FontSize",
    "MAX_SOUND_VOLUME",
    "MIN_SOUND_VOLUME",
    "PreferencesUpdate",
    "THEME_MODES",
    "ThemeMode",
    "UserPreferences",
    "clamp_volume",
]
