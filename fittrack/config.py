"""Application configuration loaded from environment variables (or .env)."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingConfigurationError(RuntimeError):
    """Raised when a required setting is absent."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Supabase ---
    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key; row-level security scopes it to the signed-in user",
    )

    # --- Local storage ---
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".fittrack",
        description="Directory for custom workouts and local session history",
    )

    # --- Runtime ---
    log_level: str = "INFO"
    web_host: str = "127.0.0.1"
    web_port: int = 8088

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    def require_supabase(self) -> tuple[str, str]:
        if not self.supabase_url or not self.supabase_anon_key:
            raise MissingConfigurationError(
                "SUPABASE_URL and SUPABASE_ANON_KEY must be set"
            )
        return self.supabase_url, self.supabase_anon_key


@lru_cache
def get_settings() -> Settings:
    return Settings()
