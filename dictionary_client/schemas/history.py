"""Search history entry schema."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

MAX_SEARCH_HISTORY_ITEMS = 50


class SearchHistoryEntry(BaseModel):
    """One remembered query; at most one entry exists per distinct query."""

    model_config = ConfigDict(extra="ignore")

    query: str = Field(..., description="Trimmed query text, matched case-sensitively.")
    timestamp: datetime = Field(..., description="When the query was last issued.")
    result_count: int | None = Field(
        None, description="Number of results the query produced, when known."
    )


__all__ = ["MAX_SEARCH_HISTORY_ITEMS", "SearchHistoryEntry"]
