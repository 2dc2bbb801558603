"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    orbit_env: str = "development"
    orbit_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Open rating sessions kept in memory before the oldest is evicted
    max_rating_sessions: int = 128

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
