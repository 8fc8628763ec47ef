"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchSettings(BaseModel):
    base_url: AnyHttpUrl = Field(default="https://api.mercadolibre.com")
    site_id: str = Field(default="MLC", min_length=3, max_length=3)
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        le=120,
        description="Applied to the shared HTTP client; None keeps the httpx default.",
    )

    @field_validator("site_id")
    @classmethod
    def _upper_site(cls, value: str) -> str:
        return value.upper()


class ThumbnailSettings(BaseModel):
    max_side_length: int = Field(default=256, ge=16, le=1280)
    jpeg_quality: int = Field(default=85, ge=10, le=95)


class BotSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MELI_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    telegram_token: SecretStr
    telegram_proxy: str | None = None
    default_language: str = "es"
    log_level: str = "INFO"
    visible_rows: int = Field(default=5, ge=1, le=20)

    search: SearchSettings = Field(default_factory=SearchSettings)
    thumbnails: ThumbnailSettings = Field(default_factory=ThumbnailSettings)


@lru_cache
def get_settings() -> BotSettings:
    """Return cached settings instance."""

    return BotSettings()  # type: ignore[call-arg]


__all__ = [
    "BotSettings",
    "SearchSettings",
    "ThumbnailSettings",
    "get_settings",
]
