from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_prefix="NOTES_EXPORTER_",
    )

    script_path: Path | None = None
    osascript: str = "osascript"
    extract_attachments: bool = True
    log_dir: Path | None = None
    redact_home: bool = True

    @field_validator("log_dir", mode="after")
    @classmethod
    def ensure_directory(cls, value: Path | None) -> Path | None:
        if value is not None:
            value.mkdir(parents=True, exist_ok=True)
        return value

    @field_validator("osascript")
    @classmethod
    def validate_osascript(cls, value: str) -> str:
        if not value.strip():
            msg = "osascript must name an executable"
            raise ValueError(msg)
        return value


settings = Settings()


__all__ = ["Settings", "settings"]
