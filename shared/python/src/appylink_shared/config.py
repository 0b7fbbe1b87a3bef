"""
config.py — pydantic-settings Settings class.

All environment variables for Appy Link are declared here.
The API, the CLI, and the tests import `settings` from this module.

Usage:
    from appylink_shared.config import settings
    print(settings.supabase_url)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_dotenv() -> Path | None:
    """Walk up from CWD to find the nearest .env file."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        candidate = parent / ".env"
        if candidate.is_file():
            return candidate
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_find_dotenv() or ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Supabase
    # -------------------------------------------------------------------------
    supabase_url: str = Field(default="")
    supabase_anon_key: str = Field(default="")
    supabase_service_key: str = Field(default="")
    jwt_secret: str = Field(default="change-me-in-production")

    # -------------------------------------------------------------------------
    # Admin access
    # -------------------------------------------------------------------------
    # Signing in with this address grants admin without a profiles lookup.
    bootstrap_admin_email: str = Field(default="")
    site_url: str = Field(default="http://localhost:3000")
    admin_redirect_path: str = Field(default="/#admin")

    # -------------------------------------------------------------------------
    # Directory and forms
    # -------------------------------------------------------------------------
    directory_page_size: int = Field(default=12, ge=1, le=200)
    directory_cache_ttl: float = Field(default=60.0, ge=0)
    form_cooldown_seconds: float = Field(default=30.0, ge=0)
    # Per-client favorites, compare lists, drafts and cooldown stamps held in
    # server memory: dropped after this long without a write, oldest first
    # once the key limit is reached.
    client_state_ttl: float = Field(default=30 * 24 * 3600.0, gt=0)
    client_state_max_keys: int = Field(default=50_000, ge=1)

    # -------------------------------------------------------------------------
    # API server
    # -------------------------------------------------------------------------
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "console"] = Field(default="console")

    # -------------------------------------------------------------------------
    # Derived / computed
    # -------------------------------------------------------------------------
    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    @property
    def admin_redirect_url(self) -> str:
        return f"{self.site_url}{self.admin_redirect_path}"

    @field_validator("supabase_url", "site_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v

    @field_validator("bootstrap_admin_email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v


# ---------------------------------------------------------------------------
# Module-level singleton, import this everywhere
# ---------------------------------------------------------------------------
settings = Settings()
