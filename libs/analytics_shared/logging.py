# libs/analytics_shared/logging.py
"""
Standardized logging configuration for all services.
"""

import logging
import sys
from typing import Optional

JSON_LOG_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name, typically __name__ from the calling module
        level: Optional level name (e.g. "DEBUG") applied to the logger

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only attach a handler once per logger
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(JSON_LOG_FORMAT))
        logger.addHandler(handler)

    if level:
        logger.setLevel(level.upper())

    return logger
