"""
Configuration modules for evalHarness.

This module contains the default run configuration and the default search
space of every registered learner.
"""

from .default_config import DEFAULT_CONFIG
from .model_configs import DEFAULT_SEARCH_SPACES

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_SEARCH_SPACES",
]
