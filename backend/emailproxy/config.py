# backend/emailproxy/config.py
import os
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ---------------------------------------------------------
    # Upstream verification API
    # ---------------------------------------------------------
    UPSTREAM_BASE: str = os.getenv("UPSTREAM_BASE", "https://rapid-email-verifier.fly.dev/api")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", 30))

    # ---------------------------------------------------------
    # Where the function is mounted; stripped before forwarding
    # ---------------------------------------------------------
    MOUNT_PREFIX: str = os.getenv("MOUNT_PREFIX", "/.netlify/functions/emailProxy")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
