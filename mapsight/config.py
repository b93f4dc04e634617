"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    mapsight_env: str = "development"
    mapsight_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Offscreen body sampling
    margin_leniency: float = 2.0
    dense_samples_per_ms: int = 50
    # Bounded for the HTTP service; a request is synchronous
    max_dense_samples: int | None = 200_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
