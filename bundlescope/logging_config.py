"""Logging configuration for the CLI and the live server."""

import logging
import logging.config
import sys
from typing import Any

from bundlescope.config import settings

# Above CRITICAL so nothing is emitted
SILENT = logging.CRITICAL + 10
logging.addLevelName(SILENT, "SILENT")


def resolve_level(level: str | None = None) -> int:
    """Translate a configured level name ("warn", "silent", ...) into a logging level."""
    name = (level or settings.log_level).strip().upper()
    if name == "WARN":
        name = "WARNING"
    if name == "SILENT":
        return SILENT
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(level: str | None = None) -> None:
    """Configure console logging, plus an optional log file from settings."""

    log_level = resolve_level(level)
    formatter = "json" if settings.log_format == "json" else "simple"

    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": formatter,
            "stream": sys.stdout,
        },
    }
    # File logging is only disabled during automated tests
    if settings.log_file and not settings.is_testing:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": settings.log_file,
            "encoding": "utf-8",
        }

    handler_names = list(handlers)

    log_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {
                "format": "%(message)s",
            },
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": handlers,
        "loggers": {
            "bundlescope": {
                "level": log_level,
                "handlers": handler_names,
                "propagate": False,
            },
            "uvicorn": {
                "level": "WARNING",
                "handlers": handler_names,
                "propagate": False,
            },
            "uvicorn.error": {
                "level": "WARNING",
                "handlers": handler_names,
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": handler_names,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(log_config)

    logger = logging.getLogger("bundlescope")
    logger.debug(
        "Logging initialized - Environment: %s, Level: %s",
        settings.environment,
        logging.getLevelName(log_level),
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    Args:
        name: Logger name, typically the short name of the calling component

    Returns:
        Logger under the ``bundlescope`` hierarchy
    """
    return logging.getLogger(f"bundlescope.{name}")
