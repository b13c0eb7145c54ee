"""Schemas for the server-owned dictionary content mirrored by the cache.

Words and characters are owned by the backend; this layer only reads them.
The models therefore accept unknown fields and tolerate ``null`` collections
so that additions on the server never break the client.
"""

from __future__ import annotations

from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

CharacterType = Literal["alphabet", "vowel", "conjunct", "diacritic", "ordinal", "symbol"]

CHARACTER_TYPES: tuple[str, ...] = get_args(CharacterType)


class RelatedTerm(BaseModel):
    """Synonym or antonym attached to a word."""

    model_config = ConfigDict(extra="allow")

    term: str
    language: str = "english"


class Word(BaseModel):
    """Dictionary entry as served by the content endpoint."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    chakma_word_script: str = ""
    romanized_pronunciation: str = ""
    english_translation: str = ""
    synonyms: tuple[RelatedTerm, ...] = ()
    antonyms: tuple[RelatedTerm, ...] = ()
    example_sentence: str = ""
    etymology: str = ""
    audio_pronunciation_url: str | None = None
    is_verified: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("synonyms", "antonyms", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class Character(BaseModel):
    """Script character shown in the learning section."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    character_script: str = ""
    character_type: str = Field(
        "alphabet",
        description=(
            "Type tag; values outside the known enumeration are kept but do not"
            " appear in any partition."
        ),
    )
    romanized_name: str = ""
    description: str | None = None
    audio_pronunciation_url: str | None = None
    created_at: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class ContentDocument(BaseModel):
    """The ``data`` member of the content endpoint response."""

    model_config = ConfigDict(extra="ignore")

    words: list[Word] = Field(default_factory=list)
    characters: list[Character] = Field(default_factory=list)
    version: int = 0

    @field_validator("words", "characters", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("version", mode="before")
    @classmethod
    def _none_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class ContentEnvelope(BaseModel):
    """Top-level ``{success, data}`` wrapper used by the REST service."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    data: ContentDocument | None = None
    error: str | None = None


class ContentSnapshot(BaseModel):
    """Immutable point-in-time copy of the server content.

    Snapshots are replaced wholesale on every successful load and are never
    patched in place.
    """

    model_config = ConfigDict(frozen=True)

    words: tuple[Word, ...] = ()
    characters: tuple[Character, ...] = ()
    version: int = 0

    @classmethod
    def from_document(cls, document: ContentDocument) -> ContentSnapshot:
        return cls(
            words=tuple(document.words),
            characters=tuple(document.characters),
            version=document.version,
        )


EMPTY_SNAPSHOT = ContentSnapshot()

__all__ = [
    "CHARACTER_TYPES",
    "Character",
    "CharacterType",
    "ContentDocument",
    "ContentEnvelope",
    "ContentSnapshot",
    "EMPTY_SNAPSHOT",
    "RelatedTerm",
    "Word",
]
