"""Schemas for the export file and the developer console record."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .history import SearchHistoryEntry


class ExportBundle(BaseModel):
    """Document written by ``export_all_data`` and read back by import.

    The camelCase aliases are the on-disk field names and must stay stable so
    previously exported files remain importable.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    preferences: dict[str, Any] | None = None
    search_history: list[SearchHistoryEntry] | None = Field(None, alias="searchHistory")
    favorites: list[str] | None = None
    exported_at: datetime | None = Field(None, alias="exportedAt")


class DeveloperConsoleState(BaseModel):
    """Auxiliary developer-mode record kept beside the user data."""

    model_config = ConfigDict(extra="ignore")

    tap_count: int = Field(0, ge=0)
    is_authenticated: bool = False
    last_tap: datetime | None = None
    last_access: datetime | None = None


__all__ = ["DeveloperConsoleState", "ExportBundle"]
