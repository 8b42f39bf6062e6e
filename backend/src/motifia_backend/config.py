"""
后端配置（pydantic-settings）。

约定：
- 从环境变量与 `.env` 读取，变量名与线上部署保持一致（GOOGLE_CLIENT_ID、AUTHORIZED_EMAIL、SESSION_SECRET ...）。
- 部署平台注入的值偶尔带引号/分号（例如 `"https://a.example";`），读取时统一剥掉。
- DATABASE_URL 缺省时落到仓库内 backend/data/motifia.sqlite3。
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _clean_env_value(value: str) -> str:
    return re.sub(r"[;'\"]", "", value).strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str | None = None

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 5000
    cors_origin: str = "http://localhost:5173"
    environment: str = "development"

    # Session
    session_secret: str = "your-secret-key"
    session_cookie: str = "motifia.sid"
    session_max_age_seconds: int = 24 * 60 * 60

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_callback_url: str = ""
    authorized_email: str = ""

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("cors_origin", "google_callback_url", mode="before")
    @classmethod
    def _strip_quotes(cls, v: object) -> object:
        if isinstance(v, str):
            return _clean_env_value(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def cookie_same_site(self) -> Literal["lax", "none"]:
        return "none" if self.is_production else "lax"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
