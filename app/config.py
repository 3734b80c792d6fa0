# app/config.py

from __future__ import annotations
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # — Core —
    SECRET_KEY: str = Field("change-me", description="JWT signing key")
    ALGORITHM: str = "HS256"
    # Tokens live for one day; there is no refresh flow.
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24, ge=5, le=60 * 24 * 7)
    BCRYPT_ROUNDS: int = Field(10, ge=4, le=15)
    # Local use only: with DEBUG on, Starlette answers unhandled errors with a
    # traceback page instead of the JSON 500 from errors.unexpected_error_handler.
    DEBUG: bool = False

    # --- Database ---
    DATABASE_URL: str = Field("sqlite:///./jobtrack.db")
    # Alembic reads DATABASE_URL from env; see alembic/env.py.

    # --- HTTP ---
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
