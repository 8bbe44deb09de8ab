"""Runtime configuration for the Hexstead server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from ``HEXSTEAD_*`` variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="HEXSTEAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(default=Path("saves"), description="Where JSON save blobs live")
    storage_backend: Literal["json", "sql", "memory"] = Field(
        default="json",
        description="Key/value store used for the tiles and state blobs",
    )
    database_url: str = Field(
        default="sqlite:///hexstead.db",
        description="SQLAlchemy URL used by the sql storage backend",
    )
    database_echo: bool = Field(default=False, description="Log every SQL statement")
    map_radius: int = Field(default=15, description="Hexagon radius of generated worlds", ge=1)
    world_seed: int = Field(default=0, description="Seed for village placement", ge=0)
    tick_interval_seconds: float = Field(
        default=0.1,
        description="Real-time seconds between economy ticks",
        gt=0.0,
    )
    autosave_interval_seconds: float = Field(
        default=10.0,
        description="Real-time seconds between automatic saves",
        gt=0.0,
    )
    autostart: bool = Field(default=True, description="Start the tick loop with the app")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Origins allowed to call the HTTP API",
    )
    log_level: str = Field(default="INFO", description="Root log level")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
