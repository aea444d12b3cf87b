"""Logging configuration for the smartcrop command line."""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

from ..core.config import DEFAULT_LOG_DIR

CONSOLE_FORMAT = '%(levelname)-5s %(message)s'
FILE_FORMAT = '%(asctime)s %(levelname)-5s [%(name)s] %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: bool = True,
    console: bool = True,
    log_dir: Path = None,
) -> logging.Logger:
    """Configure the 'smartcrop' logger for a command-line run.

    The console gets short messages at the requested level. The log file,
    one per run, always records debug detail such as focal point scores
    and crop boxes.

    Args:
        level: Console logging level (e.g., logging.DEBUG, logging.INFO)
        log_file: Whether to also write a timestamped log file
        console: Whether to log to the console
        log_dir: Folder for log files (default: ~/.smartcrop/logs)

    Returns:
        The 'smartcrop' logger
    """
    logger = logging.getLogger('smartcrop')
    logger.setLevel(logging.DEBUG if log_file else level)

    # Repeated runs in one process replace the handlers
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    if log_file:
        log_dir = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_path = log_dir / f'smartcrop_{timestamp}.log'

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
        )
        logger.addHandler(file_handler)

        logger.debug(f"Logging to {log_path}")

    # Pillow and numpy warnings end up in the same place
    logging.captureWarnings(True)

    return logger
