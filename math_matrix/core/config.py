"""
Library configuration.

Centralized configuration management with environment variables.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="MATH_MATRIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    # Fuzzy comparison defaults for Matrix.compare
    COMPARE_TOLERANCE: float = 0.001
    COMPARE_MODE: str = "relative"  # relative, absolute, sigfigs

    # Determinants with abs(value) <= this are treated as singular by inverse()
    SINGULAR_TOLERANCE: float = 0.0

    # Orders above this log a warning before a cofactor expansion
    MAX_ORDER: int = 8


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
