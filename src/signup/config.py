"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from SIGNUP_* environment variables
  - Fall back to a .env file at the project root
  - Validate types and constraints at startup

    SIGNUP_MINIMUM_AGE=21 SIGNUP_LOG_LEVEL=DEBUG signup --name ada ...
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file).
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"

DEFAULT_NAME_PATTERN = r"^[^\W\d_]+(?:[ '\-][^\W\d_]+)*$"


class SignupSettings(BaseSettings):
    """
    Sign-up rules and runtime options.

    Load order (highest priority first):
      1. Environment variables (SIGNUP_ prefix)
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="SIGNUP_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    minimum_age: int = Field(default=18, ge=0, description="Youngest accepted age")
    name_pattern: str = Field(
        default=DEFAULT_NAME_PATTERN,
        description="Regular expression a user name must fully match",
    )
    log_level: str = Field(default="INFO")

    @field_validator("name_pattern")
    @classmethod
    def validate_name_pattern(cls, value: str) -> str:
        """Reject patterns that do not compile."""
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid name pattern {value!r}: {e}") from e
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only standard logging level names, case-insensitively."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level
