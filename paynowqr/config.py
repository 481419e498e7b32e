"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class QRConfig(BaseModel):
    error_correction: Literal["L", "M", "Q", "H"] = Field(default="M")
    fill_color: str = Field(default="#7C1A78", description="PayNow purple")
    back_color: str = Field(default="#FFFFFF")
    box_size: int = Field(default=10, ge=1, le=50)
    border: int = Field(default=2, ge=0, le=10)


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = Field(default="paynowqr")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    api_key: str = Field(default="dev-secret-key")
    merchant_name: str | None = Field(default=None, description="Fallback merchant name for requests without one")
    qr: QRConfig = Field(default_factory=QRConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()


settings = get_settings()
