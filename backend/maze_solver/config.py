"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory (backend/)
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Maze Solver"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Mazes
    mazes_dir: Path = BASE_DIR / "mazes"
    max_maze_dimension: int = 1000

    # Solver
    max_steps: Optional[int] = 100_000  # per solve, None disables the limit
    random_seed: Optional[int] = None

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    # Rate limiting
    rate_limit_solves: int = 30  # solves per minute

    @field_validator("max_steps")
    @classmethod
    def validate_max_steps(cls, v: Optional[int]) -> Optional[int]:
        """Reject step limits that would stop a run before it starts."""
        if v is not None and v < 1:
            raise ValueError("MAX_STEPS must be a positive integer")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
