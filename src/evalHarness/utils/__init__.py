"""
Utility modules for evalHarness.

This module contains logging, configuration and persistence helpers.
"""

from .logger import get_logger, setup_logging
from .config import Config, ConfigManager
from .helpers import format_time, load_object, save_object

__all__ = [
    "get_logger",
    "setup_logging",
    "Config",
    "ConfigManager",
    "format_time",
    "load_object",
    "save_object",
]
