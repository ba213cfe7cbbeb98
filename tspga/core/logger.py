"""
Logging system for the TSP-GA engine.
Provides centralized logging with console and optional file handlers.
"""

import logging
import os
from datetime import datetime
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str, log_file: Optional[str] = None,
                 level: int = logging.INFO, log_dir: Optional[str] = "logs") -> logging.Logger:
    """
    Setup logger with console and file handlers.

    Args:
        name: Logger name (usually 'tspga' or __name__)
        log_file: Optional log file name. If None, a timestamped name is used.
        level: Logging level (default: INFO)
        log_dir: Directory for log files. None disables the file handler.

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger('tspga', log_dir='logs')
        >>> logger.info("Starting GA optimization...")
        >>> logger.debug(f"Generation {gen}: best length = {length}")
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is None:
        return logger

    if log_file is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = f'tsp_ga_{timestamp}.log'

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, os.path.basename(log_file))

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.debug(f"Logger initialized. Log file: {log_path}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get existing logger or create a console-only one with default settings.

    A child of an already configured logger (e.g. 'tspga.cli' under 'tspga')
    is returned as-is and propagates to its parent's handlers.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.hasHandlers():
        return setup_logger(name, log_dir=None)

    return logger
