"""exectee environment configuration.

Environment variables:
    EXECTEE_CHUNK_SIZE: Bytes read from a child's pipe per pump iteration
        - default 4096
        - clamped to 1..1048576, invalid values fall back to the default

    EXECTEE_LOG_DEBUG: Debug logging for configure_logging()
        - true/1/yes/on = DEBUG
        - false/0/no = INFO (default)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

__all__ = [
    "Config",
    "DEFAULT_CHUNK_SIZE",
    "MAX_CHUNK_SIZE",
    "load_config",
    "get_config",
    "reload_config",
]

DEFAULT_CHUNK_SIZE = 4096
MAX_CHUNK_SIZE = 1024 * 1024


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_chunk_size(value: str | None) -> int:
    """Parse the pump chunk size, clamped to a sane range."""
    if not value:
        return DEFAULT_CHUNK_SIZE
    try:
        size = int(value)
    except ValueError:
        return DEFAULT_CHUNK_SIZE
    return max(1, min(size, MAX_CHUNK_SIZE))


@dataclass
class Config:
    """exectee configuration.

    Attributes:
        chunk_size: Bytes read per pump iteration
        log_debug: Debug level for configure_logging()
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_debug: bool = False

    def __repr__(self) -> str:
        return f"Config(chunk_size={self.chunk_size}, log_debug={self.log_debug})"


def load_config() -> Config:
    """Load configuration from environment variables."""
    return Config(
        chunk_size=_parse_chunk_size(os.environ.get("EXECTEE_CHUNK_SIZE")),
        log_debug=_parse_bool(os.environ.get("EXECTEE_LOG_DEBUG"), default=False),
    )


# Global config instance (lazily loaded)
_config: Config | None = None


def get_config() -> Config:
    """Return the global configuration."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload configuration from the environment (used by tests)."""
    global _config
    _config = load_config()
    return _config
