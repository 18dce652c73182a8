"""
Settings for the terminal front end.

Everything can be overridden through environment variables named CHESS_<FIELD>, e.g. CHESS_LOG_LEVEL=debug.
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, ValidationError, field_validator

from src.core.exceptions import ConfigError

ENV_PREFIX = "CHESS_"
ESCAPE = "\x1b"


class Settings(BaseModel):
    white_style: str = "\x1b[97m"
    black_style: str = "\x1b[31m"
    reset_style: str = "\x1b[0m"
    empty_glyph: str = "."
    use_color: bool = True
    log_level: str = "WARNING"
    starting_position: Optional[str] = None

    @field_validator(*["white_style", "black_style", "reset_style"])
    @classmethod
    def validate_style(cls, value: str) -> str:
        if not value.startswith(ESCAPE):
            raise ValueError(f"{value!r} is not an ANSI escape sequence")
        return value

    @field_validator("empty_glyph")
    @classmethod
    def validate_empty_glyph(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"Empty squares are drawn with a single character, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect CHESS_* variables and validate them."""
        environ = os.environ if environ is None else environ
        overrides = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        try:
            return cls.model_validate(overrides)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in environment:\n{e}") from e
