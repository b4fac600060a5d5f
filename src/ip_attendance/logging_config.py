"""Logging configuration: coloured console output in development, plain otherwise."""
from __future__ import annotations

import logging
import logging.config


def build_logging_config(level: str = "INFO", *, colored: bool = False) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            },
            "colored": {
                "()": "colorlog.ColoredFormatter",
                "format": "%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "log_colors": {
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "colored" if colored else "standard",
            },
        },
        "loggers": {
            "ip_attendance": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
            "werkzeug": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }


def setup_logging(level: str = "INFO", *, colored: bool = False) -> logging.Logger:
    logging.config.dictConfig(build_logging_config(level, colored=colored))
    logger = logging.getLogger("ip_attendance")
    logger.debug("Logging initialized with level: %s", level)
    return logger
