"""
Application settings loaded from the environment (or a .env file).

All keys carry the GRADEBOOK_ prefix, e.g. GRADEBOOK_DATABASE_URL.
"""

import logging
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    DATABASE_URL: str = "sqlite:///./gradebook.db"

    # Grading policy
    DEFAULT_COURSE_CREDITS: float = 3.0
    STRICT_GRADE_POINTS: bool = False

    # Output
    OUTPUT_DIR: Path = Path("output")

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("DEFAULT_COURSE_CREDITS")
    @classmethod
    def _positive_credits(cls, v):
        if v <= 0:
            raise ValueError("DEFAULT_COURSE_CREDITS must be positive")
        return v

    model_config = SettingsConfigDict(
        env_prefix="GRADEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def configure_logging(level: str = None) -> None:
    """Configure root logging for scripts and entry points"""
    logging.basicConfig(
        level=getattr(logging, level or settings.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
