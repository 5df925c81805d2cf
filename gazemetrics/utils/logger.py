"""
Logging configuration for the gaze metrics package

Every module logs through logging.getLogger(__name__), so all loggers sit
under the "gazemetrics" root and configuring that root once covers the
calibrator, segmenter and pipeline.
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Optional


ROOT_LOGGER = "gazemetrics"


def setup_logger(
    name: str = ROOT_LOGGER,
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Setup logger with console and optional file handlers

    Args:
        name: Logger name
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files (default: 'logs' when log_file is given)
        log_file: Log file name (default: 'gazemetrics_YYYYMMDD.log')
        console_output: Whether to output to console

    Returns:
        Configured logger instance
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(max(level, logging.INFO))
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(name)s: %(message)s'))
        logger.addHandler(console_handler)

    if log_dir or log_file:
        log_path = _log_path(log_dir, log_file)

        # Per-frame DEBUG records (missing landmarks, untrained predictions) go to file only
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_path}")

    return logger


def _log_path(log_dir: Optional[str], log_file: Optional[str]) -> Path:
    directory = Path(log_dir) if log_dir else Path("logs")
    directory.mkdir(parents=True, exist_ok=True)

    if not log_file:
        log_file = f"gazemetrics_{datetime.now().strftime('%Y%m%d')}.log"
    return directory / log_file


def setup_logger_from_config(logging_config: Dict[str, Any]) -> logging.Logger:
    """Configure the package root logger from the 'logging' config section"""
    return setup_logger(
        name=ROOT_LOGGER,
        log_level=logging_config.get('level') or 'INFO',
        log_dir=logging_config.get('log_directory'),
        log_file=logging_config.get('log_file'),
        console_output=logging_config.get('console', True)
    )


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get existing logger instance

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
