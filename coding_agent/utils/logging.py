"""Logging configuration for the chat CLI."""

import logging
import os
import sys

from pydantic import BaseModel, ValidationError, field_validator

DEFAULT_LEVEL = "WARNING"


def normalize_level(value: str) -> str:
    """Return the canonical name of a logging level.

    Raises:
        ValueError: If ``value`` is not a level known to ``logging``
    """
    name = value.strip().upper()
    if name not in logging.getLevelNamesMapping():
        raise ValueError(f"unknown log level '{value}'")
    return name


class LogConfig(BaseModel):
    """Logging configuration."""

    level: str = DEFAULT_LEVEL
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        return normalize_level(v)

    @classmethod
    def from_env(cls) -> "LogConfig":
        """Read LOG_LEVEL, keeping the default when it is unset or invalid."""
        try:
            return cls(level=os.getenv("LOG_LEVEL") or DEFAULT_LEVEL)
        except ValidationError:
            return cls()


def setup_logging(config: LogConfig | None = None) -> None:
    """Send log records to stderr so they never interleave with the transcript on stdout."""
    if config is None:
        config = LogConfig.from_env()

    logging.basicConfig(
        level=config.level,
        format=config.format,
        datefmt=config.date_format,
        stream=sys.stderr,
        force=True,
    )

    if os.getenv("LOG_LEVEL") and config.level != os.getenv("LOG_LEVEL", "").strip().upper():
        logging.getLogger(__name__).warning(f"Ignoring invalid LOG_LEVEL, using {config.level}")

    # SDK request chatter stays quiet unless something goes wrong
    logging.getLogger("anthropic").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Get a logger for a module, honouring an explicit or LOG_LEVEL override when valid."""
    logger = logging.getLogger(name)

    try:
        log_level = normalize_level(level or os.getenv("LOG_LEVEL") or "")
    except ValueError:
        return logger

    logger.setLevel(log_level)
    return logger
