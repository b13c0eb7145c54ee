"""Centralized configuration management for the dictionary client."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every importer of :mod:`dictionary_client.settings` sees
# the same environment.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_CONTENT_PATH = "/api/content"
DEFAULT_EVENTS_PATH = "/api/events"
DEFAULT_POLL_INTERVAL_SECONDS = 4.0
DEFAULT_STORAGE_PATH = "./data/local_storage.json"
DEFAULT_STORAGE_NAMESPACE = "chakmalex"
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_LOG_LEVEL = "INFO"

StorageBackend = Literal["memory", "file", "redis"]


def _join_url(base: str, path: str) -> str:
    """Return ``base`` and ``path`` joined by exactly one slash."""

    return f"{base.rstrip('/')}/{path.lstrip('/')}"


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    The class covers the backend endpoints consumed by the content cache, the
    live synchronization knobs, and the durable store selection. Helper
    properties expose fully resolved URLs so downstream modules never repeat
    the joining logic.
    """

    _explicit_redis_url: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:  # noqa: D401 - short override explanation
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_redis_url = "redis_url" in normalized_keys
        redis_env = os.getenv("REDIS_URL")
        if redis_env is not None and redis_env.strip():
            self._explicit_redis_url = True

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        alias="API_BASE_URL",
        description="Origin of the dictionary REST service.",
    )
    content_path: str = Field(
        default=DEFAULT_CONTENT_PATH,
        alias="CONTENT_PATH",
        description="Path of the endpoint returning the full content document.",
    )
    events_path: str = Field(
        default=DEFAULT_EVENTS_PATH,
        alias="EVENTS_PATH",
        description="Path of the server-sent event stream announcing content updates.",
    )
    push_enabled: bool = Field(
        default=True,
        alias="PUSH_ENABLED",
        description=(
            "Whether the push channel may be used. When disabled the live sync"
            " channel polls the content endpoint instead."
        ),
    )
    poll_interval_seconds: float = Field(
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        alias="POLL_INTERVAL_SECONDS",
        gt=0,
        description="Interval between content reloads while polling.",
    )
    push_retry_seconds: float = Field(
        default=3.0,
        alias="PUSH_RETRY_SECONDS",
        gt=0,
        description="Delay before reconnecting a dropped push channel.",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        alias="REQUEST_TIMEOUT_SECONDS",
        gt=0,
        description="Timeout applied to content fetches.",
    )
    storage_backend: StorageBackend = Field(
        default="file",
        alias="STORAGE_BACKEND",
        description="Durable store implementation: memory, file, or redis.",
    )
    storage_path: str = Field(
        default=DEFAULT_STORAGE_PATH,
        alias="STORAGE_PATH",
        description="JSON document used by the file-backed durable store.",
    )
    storage_namespace: str = Field(
        default=DEFAULT_STORAGE_NAMESPACE,
        alias="STORAGE_NAMESPACE",
        description="Prefix applied to every durable store key.",
    )
    redis_url: str = Field(
        default=DEFAULT_REDIS_URL,
        alias="REDIS_URL",
        description="Redis connection string used when STORAGE_BACKEND=redis.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def content_url(self) -> str:
        """Return the absolute URL of the content document."""

        return _join_url(self.api_base_url, self.content_path)

    @property
    def events_url(self) -> str:
        """Return the absolute URL of the push notification stream."""

        return _join_url(self.api_base_url, self.events_path)

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if (
            self.storage_backend == "redis"
            and not self._explicit_redis_url
            and self.redis_url == DEFAULT_REDIS_URL
        ):
            warnings.append(
                "REDIS_URL is not set - the redis store will target localhost"
            )

        if self.storage_backend == "memory":
            warnings.append(
                "STORAGE_BACKEND is memory - preferences, favorites and history "
                "will not survive a restart"
            )

        if not self.push_enabled:
            warnings.append(
                "PUSH_ENABLED is false - content freshness relies on polling only"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_CONTENT_PATH",
    "DEFAULT_EVENTS_PATH",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "DEFAULT_REDIS_URL",
    "DEFAULT_STORAGE_NAMESPACE",
    "DEFAULT_STORAGE_PATH",
    "StorageBackend",
    "get_settings",
]
