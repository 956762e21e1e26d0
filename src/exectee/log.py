"""Opt-in logging setup for the exectee logger."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from .config import Config, get_config

__all__ = ["LOG_FORMAT", "configure_logging"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_PACKAGE_LOGGER = "exectee"


def configure_logging(
    config: Config | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Level is DEBUG when config.log_debug is set, INFO otherwise. Calling this
    again replaces the handler installed by the previous call.

    Args:
        config: Configuration (default: global config)
        stream: Stream for the handler (default: sys.stderr)

    Returns:
        The configured package logger
    """
    config = config or get_config()
    logger = logging.getLogger(_PACKAGE_LOGGER)

    for handler in list(logger.handlers):
        if getattr(handler, "_exectee_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._exectee_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if config.log_debug else logging.INFO)

    return logger
