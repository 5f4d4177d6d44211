# config.py
# Runtime settings for the API and the terminal driver.

import logging
import os
import random
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from slide2048.core import ALLOWED_SIZES, DEFAULT_SIZE

ENV_PREFIX = "SLIDE2048_"

class GameSettings(BaseModel):
    """Settings shared by the API and the CLI driver."""
    board_size: int = Field(
        default=DEFAULT_SIZE,
        description=f"Size of the N x N game board, one of {list(ALLOWED_SIZES)}."
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the tile spawning random source. None means non-deterministic."
    )
    rate_limit: str = Field(
        default="100/minute",
        description="slowapi rate limit applied to each API endpoint."
    )
    log_level: str = Field(default="INFO", description="Root logging level.")

    @field_validator("board_size")
    @classmethod
    def _check_board_size(cls, value: int) -> int:
        if value not in ALLOWED_SIZES:
            raise ValueError(f"board_size must be one of {list(ALLOWED_SIZES)}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameSettings":
        """
        Builds settings from SLIDE2048_* environment variables.
        Args:
            environ (Mapping[str, str], optional): Defaults to os.environ.
        Returns:
            GameSettings: Settings with unset variables left at their defaults.
        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        values = {}
        for field_name in cls.model_fields:
            raw = env.get(ENV_PREFIX + field_name.upper())
            if raw is not None and raw != "":
                values[field_name] = raw
        return cls(**values)

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
