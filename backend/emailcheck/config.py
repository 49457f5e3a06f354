# backend/emailcheck/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os

DEFAULT_API_BASE = "https://rapid-email-verifier.fly.dev/api"


class Settings(BaseSettings):
    APP_NAME: str = "emailcheck"

    # Upstream verification API (or the proxy in front of it)
    API_BASE: str = os.environ.get("API_BASE", DEFAULT_API_BASE)
    REQUEST_TIMEOUT: float = float(os.environ.get("REQUEST_TIMEOUT", 30))

    # File upload limits
    MAX_UPLOAD_SIZE_MB: int = int(os.environ.get("MAX_UPLOAD_SIZE_MB", 25))
    DOWNLOAD_FILENAME: str = os.environ.get("DOWNLOAD_FILENAME", "validated_emails.xlsx")

    CORS_ORIGINS: str = os.environ.get("CORS_ORIGINS", "*")

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
    DEBUG: bool = os.environ.get("DEBUG", "False").lower() in ("1", "true", "yes")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
