"""
Default configuration for evalHarness.

``DEFAULT_CONFIG`` is the flat mapping of ``Config`` defaults, the same keys a
YAML or JSON run file accepts.
"""

from dataclasses import asdict

from ..utils.config import Config

DEFAULT_CONFIG = asdict(Config())

# metric used when a run names none
DEFAULT_METRICS = {
    "regression": "rmse",
    "classification": "ce",
}
