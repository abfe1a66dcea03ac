"""Lightweight configuration for the variant service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment or a `.env` file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    launch_schedule: list[tuple[str, int]] = Field(
        default_factory=lambda: [("pure", 1), ("ancmed", 2), ("modern", 3)],
        description="Ordered (variant name, minimum API level) pairs for staged rollout",
    )
    default_api_level: int = Field(
        default=1,
        description="API level assumed for callers that do not declare one",
        ge=0,
    )
    map_max_age_seconds: int = Field(
        default=3600,
        description="Cache-Control max-age sent with variant map images",
        ge=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )
    log_level: str = Field(default="info", description="Log level handed to uvicorn")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
