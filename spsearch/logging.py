"""Centralized logging configuration for spsearch.

All modules obtain their logger through ``get_logger(__name__)``. Loggers are
children of the ``spsearch`` root logger, which owns the only handler. The
initial level comes from the ``SPSEARCH_LOG_LEVEL`` environment variable
(a level name such as ``DEBUG``) and defaults to INFO.
"""

import logging
import os
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "spsearch"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "SPSEARCH_LOG_LEVEL"

_ROOT_LOGGER_CONFIGURED = False


def parse_level(level: Union[int, str]) -> int:
    """Convert a level name or number to a logging level.

    Args:
        level: Integer level or case-insensitive name ("debug", "WARNING").

    Returns:
        Numeric logging level.

    Raises:
        ValueError: If the name is not a known logging level.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'.")
    return value


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a single handler to the ``spsearch`` logger.

    Later calls do nothing until ``reset_logging()`` is called.

    Args:
        level: Logging level. When None, read ``SPSEARCH_LOG_LEVEL`` or use INFO;
            an unknown name in the variable logs a warning and falls back to INFO.
        format_string: Custom format string.
        handler: Custom handler; defaults to a stdout StreamHandler.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    bad_env_level: Optional[str] = None
    if level is None:
        env_level = os.environ.get(LOG_LEVEL_ENV, "INFO")
        try:
            level = parse_level(env_level)
        except ValueError:
            # Called at import time; never raise here
            level = logging.INFO
            bad_env_level = env_level

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True

    if bad_env_level is not None:
        root_logger.warning(
            f"Ignoring unknown {LOG_LEVEL_ENV}={bad_env_level!r}; using INFO."
        )


def get_logger(name: str) -> logging.Logger:
    """Return a logger that inherits the ``spsearch`` root configuration.

    Args:
        name: Logger name, normally ``__name__`` of the caller.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: Union[int, str]) -> None:
    """Set the level of the root logger and of its handlers."""
    setup_root_logger()
    numeric = parse_level(level)
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric)
    for handler in root_logger.handlers:
        handler.setLevel(numeric)


def enable_debug_logging() -> None:
    """Enable debug logging for the entire package."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Go back to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop handlers and forget the configuration (used by tests)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
