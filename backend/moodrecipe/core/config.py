"""
config.py — Centralized Application Configuration Loader

Purpose:
- Define a single source of truth for application settings.
- Load and validate environment variables from `.env` or OS environment.

Settings are read once at process start and handed to create_app(), which
builds the AppContext that every component receives. Nothing else in the
backend should read the environment directly.

This module does NOT:
- Open database connections.
- Build the signing or hashing primitives (see core/security.py).
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/moodrecipe/core/config.py
# .env should be at: backend/.env
_CONFIG_DIR = Path(__file__).parent
_BACKEND_DIR = _CONFIG_DIR.parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # Fallback: pydantic looks in CWD
    _ENV_FILE_PATH = ".env"


class Settings(BaseSettings):
    """
    Runtime settings for the mood recipe backend.
    """

    # Database
    DATABASE_URL: str = Field(
        "sqlite:///./moodrecipe.db",
        description="SQLAlchemy URL (sqlite:///..., postgresql://user:pw@host/db)",
    )

    # Session tokens
    # Required: no default, so a deployment without a key fails at startup
    JWT_SECRET_KEY: str = Field(
        ...,
        description="HMAC key used to sign session tokens",
    )
    JWT_ALGORITHM: str = Field(
        "HS256",
        description="JWT signing algorithm",
    )
    JWT_EXPIRE_MINUTES: int = Field(
        60,
        gt=0,
        description="Session token lifetime (minutes)",
    )

    # Password hashing
    BCRYPT_ROUNDS: int = Field(
        10,
        ge=4,
        le=31,
        description="bcrypt work factor (log2 rounds)",
    )

    # Logging
    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level: DEBUG, INFO, WARNING, ERROR",
    )

    # CORS
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )

    @field_validator("JWT_SECRET_KEY", mode="before")
    @classmethod
    def strip_secret(cls, v: Any) -> str:
        """Strip whitespace and refuse an empty signing key."""
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("JWT_SECRET_KEY must not be empty")
        return v

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
