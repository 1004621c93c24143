"""Central configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Issuer shown by authenticator apps
    totp_issuer: str = "DigiMarket"

    # Logging
    log_level: str = "INFO"


settings = Settings()
