"""
Data handling modules for evalHarness.

This module contains data validation utilities. The CSV loader depends on
``core.task`` and is imported from ``evalHarness.data.loader`` directly.
"""

from .validator import DataValidator

__all__ = [
    "DataValidator",
]
