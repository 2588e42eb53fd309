# config.py
# Settings for the 2048 front ends, read from environment variables.

import os
from dataclasses import dataclass

DEFAULT_SIZE = 4
DEFAULT_TARGET = 2048
DEFAULT_RATE_LIMIT = "100/minute"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    default_size: int = DEFAULT_SIZE
    default_target: int = DEFAULT_TARGET
    rate_limit: str = DEFAULT_RATE_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} should be an integer, got {raw!r}") from None


def load_settings() -> Settings:
    """Builds Settings from PLAY2048_* environment variables."""
    return Settings(
        default_size=_int_from_env("PLAY2048_DEFAULT_SIZE", DEFAULT_SIZE),
        default_target=_int_from_env("PLAY2048_DEFAULT_TARGET", DEFAULT_TARGET),
        rate_limit=os.environ.get("PLAY2048_RATE_LIMIT", DEFAULT_RATE_LIMIT),
        log_level=os.environ.get("PLAY2048_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
