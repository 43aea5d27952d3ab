import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from intouch.core.config import settings

def setup_logging(log_file: str = None):
    """
    Configure application logging.

    Args:
        log_file (str): Path of the rotating log file, defaults to settings.LOG_FILE

    Returns:
        logging.Logger: Configured root logger
    """
    log_file = log_file or settings.LOG_FILE
    # Create the log directory if it doesn't exist
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # File handler with rotation
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10485760,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    logger.info(f"Logging initialized. Level: {settings.LOG_LEVEL}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    return logger

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        name (str): Name of the component

    Returns:
        logging.Logger: Logger for the component
    """
    return logging.getLogger(name)
