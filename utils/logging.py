"""
Logging configuration for Bomb Party Bot.
"""
import logging
import sys
from pathlib import Path
from typing import Optional
import config


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        log_format: Log format string
    """
    log_level = (log_level or config.LOG_LEVEL).upper()
    log_file = log_file or config.LOG_FILE
    log_format = log_format or config.LOG_FORMAT
    formatter = logging.Formatter(log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level))
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # discord.py is chatty at DEBUG
    logging.getLogger("discord").setLevel(max(logging.INFO, root_logger.level))

    return root_logger
