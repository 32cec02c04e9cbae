"""Centralized logging configuration for the dashboard core.

Console output stays human-readable for CLI usage; the rotating file handler
always writes structured JSON so fetch failures and locale switches can be
analysed after the fact.
"""

import copy
import logging
import logging.config
from typing import Any


LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
        "console": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
        "json_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "json",
            "filename": "logs/nrega_dash.log",
            "maxBytes": 5242880,  # 5MB
            "backupCount": 3,
        },
    },
    "loggers": {
        "nrega_dash": {
            "level": "DEBUG",
            "handlers": ["console", "json_file"],
            "propagate": False,
        },
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}


def setup_logging(
    json_output: bool = False, log_level: str = "INFO", log_dir: str = "logs"
) -> None:
    """Configure logging for the dashboard.

    Args:
        json_output: Use the JSON formatter on the console as well
        log_level: Console and package level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the rotating JSON log file
    """
    import os

    os.makedirs(log_dir, exist_ok=True)

    # Overrides below must not leak into LOGGING_CONFIG
    config = copy.deepcopy(LOGGING_CONFIG)
    config["handlers"]["json_file"]["filename"] = os.path.join(log_dir, "nrega_dash.log")

    if json_output:
        config["handlers"]["console"]["formatter"] = "json"

    if log_level:
        level = log_level.upper()
        config["handlers"]["console"]["level"] = level
        config["loggers"]["nrega_dash"]["level"] = level

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Example:
        logger = get_logger(__name__)
        logger.info("Loaded districts", extra={"state": "Bihar", "count": 38})
    """
    return logging.getLogger(name)
