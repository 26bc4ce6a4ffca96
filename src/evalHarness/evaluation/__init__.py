"""
Evaluation modules for evalHarness.

This module contains the metric registry, score calculation and reporting.
"""

from .metrics import Metric, MetricRegistry, MetricsCalculator, default_metrics
from .reporter import ResultsReporter

__all__ = [
    "Metric",
    "MetricRegistry",
    "MetricsCalculator",
    "default_metrics",
    "ResultsReporter",
]
