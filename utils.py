"""
Utility functions for PPT Studio
"""

import os
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(levelname)s - %(message)s'
INVALID_FILENAME_CHARS = '<>:"/\\|?*'
MAX_FILENAME_LENGTH = 80


def setup_logger(name: str = "ppt_studio", log_dir: Optional[str] = None,
                 level: int = logging.INFO) -> logging.Logger:
    """
    Attach a daily log file and a console handler to a logger

    Args:
        name: Logger name; "ppt_studio" covers every module of the package
        log_dir: Directory for log files (defaults to PPT_LOG_DIR or ./logs)
        level: Level for the logger and both handlers

    Returns:
        The configured logger
    """
    directory = Path(log_dir or os.getenv("PPT_LOG_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Reconfiguring replaces handlers instead of stacking them
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()

    log_path = directory / f"app_{datetime.now():%Y%m%d}.log"
    handlers = (
        (logging.FileHandler(log_path, encoding="utf-8"), FILE_FORMAT),
        (logging.StreamHandler(), CONSOLE_FORMAT),
    )
    for handler, fmt in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    return logger


def sanitize_filename(filename: str) -> str:
    """Make a topic safe to use as a file name: no path characters, no whitespace"""
    cleaned = "".join('_' if ch in INVALID_FILENAME_CHARS else ch for ch in filename)
    cleaned = '_'.join(cleaned.split())
    return cleaned[:MAX_FILENAME_LENGTH] or "presentation"


def build_download_name(topic: str, when: Optional[datetime] = None) -> str:
    """File name offered for download, e.g. Solar_Energy_20260101_120000.pptx"""
    when = when or datetime.now()
    return f"{sanitize_filename(topic)}_{when:%Y%m%d_%H%M%S}.pptx"


def format_size(bytes_size: float) -> str:
    """
    Human-readable size for log lines

    Args:
        bytes_size: Size in bytes

    Returns:
        e.g. "2.00 KB"
    """
    size = float(bytes_size)
    for unit in ('B', 'KB', 'MB', 'GB'):
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} TB"
