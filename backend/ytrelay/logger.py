"""Logging configuration for the application."""

import logging
import sys
from ytrelay.config import settings

# Configure logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Configure root logger
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


# Create loggers for different modules
app_logger = get_logger("app")
auth_logger = get_logger("auth")
upload_logger = get_logger("upload")
storage_logger = get_logger("storage")
