"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .pix_encoder import MerchantConstants


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=(Path(__file__).resolve().parent.parent / ".env"), env_file_encoding="utf-8", env_nested_delimiter="__")

    app_name: str = Field(default="pixcard")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    api_key: str = Field(default="dev-secret-key")
    default_merchant_city: str = Field(default="SAO PAULO", min_length=1)
    pix_gui: str = Field(default="br.gov.bcb.pix", min_length=1, max_length=32)
    currency_code: str = Field(default="986", pattern=r"^\d{3}$")
    country_code: str = Field(default="BR", pattern=r"^[A-Z]{2}$")
    qr_error_correction: Literal["L", "M", "Q", "H"] = Field(default="H")
    qr_box_size: int = Field(default=10, ge=1, le=40)
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def merchant_constants(self) -> MerchantConstants:
        return MerchantConstants(gui=self.pix_gui, currency=self.currency_code, country=self.country_code)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()


settings = get_settings()
