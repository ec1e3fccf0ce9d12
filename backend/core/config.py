"""Application configuration loaded from environment and .env file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

try:
    from dotenv import load_dotenv
except Exception:
    load_dotenv = None

logger = logging.getLogger(__name__)

INSECURE_ACCESS_SECRET = "CHANGE_ME_ACCESS_TOKEN_SECRET"
INSECURE_REFRESH_SECRET = "CHANGE_ME_REFRESH_TOKEN_SECRET"


def find_project_root() -> Path:
    """Return the nearest ancestor directory that contains a .env file.

    Starts at the directory of this file and walks up to the filesystem root.
    Falls back to two levels above this file if no .env is found.
    """
    current_dir = Path(__file__).parent
    while current_dir != current_dir.parent:
        if (current_dir / ".env").exists():
            return current_dir
        current_dir = current_dir.parent
    return Path(__file__).parent.parent.parent


# Pre-load .env so code using os.getenv(...) sees the same values
PROJECT_ROOT: Path = find_project_root()
if load_dotenv is not None:
    load_dotenv(PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    """Strongly-typed application settings loaded from environment and .env."""

    # Application
    ENVIRONMENT: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./wardrobe.sqlite"

    # JWT (access and refresh tokens are signed with separate secrets)
    ACCESS_TOKEN_SECRET: str = INSECURE_ACCESS_SECRET
    REFRESH_TOKEN_SECRET: str = INSECURE_REFRESH_SECRET
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Refresh cookie
    REFRESH_COOKIE_NAME: str = "refreshToken"

    # CORS (comma-separated)
    CORS_ORIGINS_DEV: str = "http://localhost,http://localhost:3000,http://localhost:8501"
    CORS_ORIGINS_PROD: str = "https://wardrobe.example.com"

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Singleton settings instance
settings = Settings()

if settings.ACCESS_TOKEN_SECRET == INSECURE_ACCESS_SECRET:
    logger.warning(
        "Insecure ACCESS_TOKEN_SECRET is in use. Set a strong secret in your environment."
    )
if settings.REFRESH_TOKEN_SECRET == INSECURE_REFRESH_SECRET:
    logger.warning(
        "Insecure REFRESH_TOKEN_SECRET is in use. Set a strong secret in your environment."
    )
if settings.ACCESS_TOKEN_SECRET == settings.REFRESH_TOKEN_SECRET:
    logger.warning(
        "ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET are identical; "
        "refresh and access tokens become interchangeable."
    )


def _environment() -> str:
    """Return the active environment, preferring the live process env."""
    return (os.getenv("ENVIRONMENT") or settings.ENVIRONMENT).strip().lower()


def is_production() -> bool:
    """Return True when running with ENVIRONMENT=prod (or production)."""
    return _environment() in {"prod", "production"}


def cors_origins() -> list[str]:
    """Return the allowed CORS origins for the active environment."""
    if is_production():
        raw = os.getenv("CORS_ORIGINS_PROD") or settings.CORS_ORIGINS_PROD
    else:
        raw = os.getenv("CORS_ORIGINS_DEV") or settings.CORS_ORIGINS_DEV
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
