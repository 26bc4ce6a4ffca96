"""
Error types for evalHarness.

All harness errors derive from ``HarnessError`` (itself a ``ValueError``) and
carry the name of the failing operation and the offending value so that the
failing call can be reproduced from the message alone.
"""

from typing import Any, Optional


class HarnessError(ValueError):
    """Base class for all evalHarness errors."""

    def __init__(self, message: str, operation: Optional[str] = None, value: Any = None):
        if operation is not None:
            message = f"{operation}: {message}"
        if value is not None:
            message = f"{message} (value={value!r})"
        super().__init__(message)
        self.operation = operation
        self.value = value


class SchemaError(HarnessError):
    """Malformed task construction or mutation."""


class ConfigError(HarnessError):
    """Invalid split, tuning or learner configuration."""


class FitError(HarnessError):
    """A learner failed to fit."""


class PredictError(HarnessError):
    """Prediction requested on a task with an incompatible feature schema."""


class MetricError(HarnessError):
    """Metric incompatible with the target, or malformed score input."""
