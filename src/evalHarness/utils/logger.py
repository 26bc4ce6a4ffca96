"""
Logging utilities for evalHarness.

Every component asks ``get_logger`` for a named logger; the CLI calls
``setup_logging`` once to pick the level and an optional log file.
"""

import logging
import sys
from typing import Optional, Union
from pathlib import Path

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
ROOT_LOGGER = "evalHarness"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger namespaced under the package logger.

    Args:
        name: Component name, e.g. ``"Evaluator"``
        level: Optional level override for this logger

    Returns:
        Logger instance
    """
    logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")
    if level is not None:
        logger.setLevel(level)
    return logger


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Setup logging for the package logger.

    Args:
        level: Logging level (int or name such as ``"DEBUG"``)
        log_file: Optional log file path
        log_format: Optional custom log format

    Returns:
        The configured package logger
    """
    level = _resolve_level(level)
    formatter = logging.Formatter(log_format or LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level)
    return logger
