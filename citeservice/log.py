"""Logging setup."""

from __future__ import annotations

import logging

from citeservice.config import LoggingConfig


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure root logging from the service config.

    Safe to call more than once; later calls replace the handlers.
    """
    config = config or LoggingConfig()
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.level}")

    logging.basicConfig(level=level, format=config.format, force=True)
