"""
Loguru setup for the reporting engine.

A single stderr sink at `get_config().log_level`. The sink is only rebuilt
when the configured level changes, so a config override is picked up by the
next `get_logger` call without stacking sinks.
"""

import sys
from typing import Optional

from loguru import logger

from resale_reports.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class AppLogger:
    """Global logger configuration for the reporting engine.

    Sets the log level from get_config().log_level.
    """
    _sink_id: Optional[int] = None
    _level: Optional[str] = None

    def __init__(self) -> None:
        log_level = get_config().log_level.upper()
        if AppLogger._level != log_level:
            if AppLogger._sink_id is None:
                logger.remove()
            else:
                logger.remove(AppLogger._sink_id)
            logger.configure(extra={"component": "resale_reports"})
            AppLogger._sink_id = logger.add(sink=sys.stderr, level=log_level, format=LOG_FORMAT)
            AppLogger._level = log_level
        self.logger = logger

    def get_logger(self, name: str = None):
        """Get the configured logger, bound to `name` as its component when given."""
        if name:
            return self.logger.bind(component=name)
        return self.logger


def get_logger(name: str = None):
    """Get an application logger using the latest config."""
    return AppLogger().get_logger(name)
