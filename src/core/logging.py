"""
Logging configuration for the PR Feedback Bot.
"""

import sys
from typing import Optional

from loguru import logger

from src.config import settings


def configure_logging() -> None:
    """Configure application-wide loguru sinks."""

    logger.remove()

    log_level = "DEBUG" if settings.debug else "INFO"

    if settings.environment == "development":
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[logger_name]}</cyan> | "
                "<level>{message}</level>"
            ),
            level=log_level,
            colorize=True,
            backtrace=True,
            diagnose=settings.debug,
        )
    else:
        # One JSON object per line for the log collector
        logger.add(
            sys.stderr,
            level=log_level,
            serialize=True,
        )


logger.configure(extra={"logger_name": "app"})
configure_logging()


def get_logger(name: Optional[str] = None):
    """Get a logger instance with optional name binding."""
    if name:
        return logger.bind(logger_name=name)
    return logger
