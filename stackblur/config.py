"""Library configuration."""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """StackBlur settings, overridable via ``STACKBLUR_*`` environment variables."""

    # Default 8-bit narrowing when a call does not choose one
    NARROWING: Literal["truncate", "clamp"] = "truncate"

    # Refuse images with more pixels than this (0 = unlimited)
    MAX_PIXELS: int = 0

    # Upper bound for the ring buffer of one chunk of rows or columns
    RING_BUDGET_BYTES: int = 1 << 20

    model_config = {"env_prefix": "STACKBLUR_"}


settings = Settings()
