"""
Evaluator configuration.

Settings are read from environment variables prefixed with ``EXPRCALC_``
(or a ``.env`` file), e.g. ``EXPRCALC_MAX_DEPTH=32``.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Evaluator settings"""

    model_config = SettingsConfigDict(
        env_prefix="EXPRCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Evaluation
    MAX_DEPTH: int = Field(default=64, ge=1, description="Deepest allowed nesting of function arguments")

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
