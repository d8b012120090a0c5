import sys
from loguru import logger as loguru_logger

from parking_reservation.config.settings_env import settings


def initialize_logger():
    """Initialize the logger based on DEV_MODE setting."""
    loguru_logger.remove()

    if settings.DEV_MODE:
        loguru_logger.add(sys.stderr, level="TRACE", backtrace=True, diagnose=True)
    else:
        loguru_logger.add(
            sys.stderr,
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
            backtrace=False,
            diagnose=False,
        )

    return loguru_logger


# Initialize logger
logger = initialize_logger()
