"""
Living Burden Atlas - Logging Configuration
JSON log lines in production, readable lines elsewhere

Logs go to stderr so the pipeline's stdout stays a clean JSON report.
"""

import logging
import os
import sys
from datetime import datetime
from typing import IO, Optional

from pythonjsonlogger import jsonlogger

from config.settings import get_settings

settings = get_settings()

JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: Optional[str] = None) -> int:
    """
    Turn a level name (any case) into a logging level.

    Args:
        level: Level name, e.g. "info" (default: settings.LOG_LEVEL)

    Returns:
        Numeric logging level
    """
    name = (level or settings.LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level or settings.LOG_LEVEL}")
    return value


def build_formatter() -> logging.Formatter:
    if settings.ENVIRONMENT == "production":
        return jsonlogger.JsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    name: str = "tlbi",
    level: Optional[str] = None,
    log_dir: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Configure logging for a pipeline run.

    The named logger and the root logger share the same handlers, so module
    loggers from get_logger() end up in the same places.

    Args:
        name: Logger name, also the prefix of the daily log file
        level: Level name (default: settings.LOG_LEVEL)
        log_dir: Directory for a dated log file (default: settings.LOG_DIR,
            empty means console only)
        stream: Console stream (default: sys.stderr)

    Returns:
        Configured logger instance
    """
    formatter = build_formatter()
    log_dir = settings.LOG_DIR if log_dir is None else log_dir

    handlers = [logging.StreamHandler(stream or sys.stderr)]

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"{name}_{datetime.now().strftime('%Y%m%d')}.log")
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))
    logger.handlers = list(handlers)
    logger.propagate = False

    root_logger = logging.getLogger()
    root_logger.setLevel(logger.level)
    root_logger.handlers = list(handlers)

    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Logger for a module (typically __name__)"""
    return logging.getLogger(module_name)
