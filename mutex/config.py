"""
Service configuration, read from the environment (and a .env file if present).
"""

import logging
import sys
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ",".join((
    "http://localhost:5173",  # local dev
    "https://moneflo.netlify.app",
))
DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Settings from ``MUTEX_*`` variables; Supabase keeps its own names."""

    model_config = SettingsConfigDict(
        env_prefix="MUTEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase
    supabase_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUPABASE_URL", "MUTEX_SUPABASE_URL")
    )
    supabase_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUPABASE_KEY", "MUTEX_SUPABASE_KEY")
    )

    # Server
    cors_origins: str = Field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = Field(default="INFO")
    max_upload_bytes: int = Field(default=DEFAULT_MAX_UPLOAD_BYTES, gt=0)

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def allowed_origins(self) -> List[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or DEFAULT_CORS_ORIGINS.split(",")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("mutex")
    logger.setLevel(level)

    # Avoid adding multiple handlers if called again (e.g. on reload)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
