"""
Logging setup for scrape-serp.

Loggers always write to the console. A rotating log file is added when a
log directory (or an explicit file) is configured, either by the caller or
through SERP_LOG_DIR.

Level resolution: explicit argument, then SERP_LOG_LEVEL, then LOG_LEVEL,
then INFO.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv


# Load environment
load_dotenv()

PathLike = Union[str, Path]

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5


def resolve_level(log_level: Optional[str] = None) -> int:
    """Turn a level name (or the environment's) into a logging level."""
    name = log_level or os.getenv("SERP_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO"
    return getattr(logging, name.upper(), logging.INFO)


def resolve_log_file(name: str, log_dir: Optional[PathLike] = None) -> Optional[Path]:
    """
    Work out the log file for a logger.

    Args:
        name: Logger name, used as the file stem
        log_dir: Directory for log files (falls back to SERP_LOG_DIR)

    Returns:
        Path to {log_dir}/{name}.log, or None when no directory is configured
    """
    log_dir = log_dir or os.getenv("SERP_LOG_DIR")
    if not log_dir:
        return None

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"{name}.log"


def setup_logging(
    name: str = "scrape-serp",
    log_level: Optional[str] = None,
    log_file: Optional[PathLike] = None,
    log_dir: Optional[PathLike] = None,
) -> logging.Logger:
    """
    (Re)configure a named logger.

    Args:
        name: Logger name (default: "scrape-serp")
        log_level: Level name such as "DEBUG"
        log_file: Explicit log file path; overrides log_dir
        log_dir: Directory for {name}.log

    Returns:
        Configured logger instance
    """
    level = resolve_level(log_level)
    if log_file is None:
        log_file = resolve_log_file(name, log_dir)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized: level={logging.getLevelName(level)}, file={log_file}")

    return logger


def get_logger(name: str = "scrape-serp") -> logging.Logger:
    """
    Get a logger, configuring it from the environment on first use.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        setup_logging(name)

    return logger
