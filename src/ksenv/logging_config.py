"""Logging configuration for console consumers of the facade."""

import logging
import logging.config
from typing import Any

LOG_LEVELS: tuple[str, ...] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def get_logging_config(level: str = "WARNING") -> dict[str, Any]:
    """Get logging configuration routing ksenv records to stderr."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "ksenv": {
                "handlers": ["default"],
                "level": level.upper(),
                "propagate": True,
            },
        },
    }


def configure_logging(level: str = "WARNING") -> None:
    """Apply the ksenv logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
