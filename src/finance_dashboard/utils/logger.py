"""Logging setup shared by the API and the dashboard."""
import logging
import sys
from typing import Optional

LOGGER_NAME = "finance_dashboard"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the package logger (once)."""
    global _configured
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))

    if not _configured:
        # Remove existing handlers
        logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(console_handler)
        _configured = True

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger inside the package tree, e.g. get_logger(__name__)."""
    if name is None or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
