"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    regiongrow_env: str = "development"
    regiongrow_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Segmentation defaults
    default_depth: int = 4
    default_threshold: float = 50.0
    # Largest block the API will segment (2^max_depth per side)
    max_depth: int = 6

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
