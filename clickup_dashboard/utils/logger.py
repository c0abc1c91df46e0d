"""
Logging configuration

Console output at INFO, plus a DEBUG-level file under LOG_DIR when one is
configured. API keys must go through mask_api_key before being logged.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from clickup_dashboard.config.settings import settings
from clickup_dashboard.config.constants import LOG_FORMAT, LOG_DATE_FORMAT, API_KEY_VISIBLE_CHARS


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    return handler


def setup_logger(name: str = "clickup_dashboard", log_dir: Optional[str] = None) -> logging.Logger:
    """
    Setup and configure logger

    Args:
        name: Logger name, also used for the log file name
        log_dir: Directory for the log file (defaults to LOG_DIR; empty disables the file)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.propagate = False

    # Reconfiguring replaces handlers instead of stacking them
    logger.handlers.clear()
    logger.addHandler(_handler(logging.StreamHandler(sys.stdout), logging.INFO))

    if log_dir is None:
        log_dir = settings.LOG_DIR
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(logging.FileHandler(path / f"{name}.log", encoding="utf-8"), logging.DEBUG))

    return logger


def mask_api_key(api_key: Optional[str]) -> str:
    """Shorten an API key for log output, e.g. 'pk_1234567...'"""
    if not api_key:
        return "None"
    return f"{api_key[:API_KEY_VISIBLE_CHARS]}..."


# Global logger instance
logger = setup_logger()
