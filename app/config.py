# app/config.py

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)

_LLM_PROVIDERS = {"stub", "gemini"}
_CACHE_BACKENDS = {"file", "redis"}


class Settings(BaseSettings):
    """
    Single project config. Reads environment variables.
    Pydantic v2 + pydantic-settings.
    """
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # --- Core ---
    ENVIRONMENT: str = Field("dev", description="Application environment (dev, test, prod)")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    # --- Database (remote event store surface) ---
    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./events.db",
        description="Async database URL (sqlite+aiosqlite:// or postgresql+asyncpg://)",
    )

    # --- Generation service ---
    LLM_PROVIDER: str = Field("stub", description="LLM provider to use ('stub', 'gemini')")
    GEMINI_API_KEY: Optional[str] = Field(None, description="API Key for Google Gemini")
    GEMINI_MODEL: str = Field("gemini-2.5-flash", description="Gemini model name")
    GEMINI_TEMPERATURE: float = Field(0.7, description="Sampling temperature for Gemini")

    # --- Event store client ---
    EVENTS_API_URL: str = Field("http://localhost:8000/api", description="Base URL of the remote event store")
    EVENTS_PROBE_TIMEOUT: float = Field(1.0, description="Liveness probe timeout, seconds")
    LOCAL_CACHE_BACKEND: str = Field("file", description="Local cache backend ('file', 'redis')")
    LOCAL_CACHE_PATH: str = Field(".cache/events.json", description="JSON file used by the 'file' cache")
    LOCAL_CACHE_KEY: str = Field("smart_event_planner_events", description="Durable key holding the cached events")
    REDIS_URL: str = Field("redis://localhost:6379/0", description="URL for Redis connection")

    # --- HTTP ---
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"], description="Allowed browser origins")

    @model_validator(mode="after")
    def normalise_names(self) -> "Settings":
        self.LLM_PROVIDER = self.LLM_PROVIDER.lower()
        self.LOCAL_CACHE_BACKEND = self.LOCAL_CACHE_BACKEND.lower()
        if self.LLM_PROVIDER not in _LLM_PROVIDERS:
            raise ValueError(f"Unknown LLM provider: {self.LLM_PROVIDER}")
        if self.LOCAL_CACHE_BACKEND not in _CACHE_BACKENDS:
            raise ValueError(f"Unknown local cache backend: {self.LOCAL_CACHE_BACKEND}")
        return self


try:
    settings = Settings()
    log.info("Settings loaded successfully for ENVIRONMENT=%s", settings.ENVIRONMENT)
    # Never log the Gemini key.
    log.debug(
        "Loaded settings: DB URL=%s..., LLM Provider=%s, Events API=%s, Cache backend=%s",
        settings.DATABASE_URL[:25],
        settings.LLM_PROVIDER,
        settings.EVENTS_API_URL,
        settings.LOCAL_CACHE_BACKEND,
    )
except Exception:
    log.exception("Failed to instantiate Settings.")
    raise
