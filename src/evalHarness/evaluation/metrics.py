"""
Evaluation metrics for evalHarness.

This module contains the metric registry and the calculator that scores
predictions against actual target values.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
import numpy as np
from sklearn.metrics import (
    accuracy_score, balanced_accuracy_score, f1_score,
    mean_absolute_error, mean_squared_error, r2_score,
)
from sklearn.utils.multiclass import type_of_target

from ..core.base import TaskType
from ..core.exceptions import MetricError
from ..utils.logger import get_logger


@dataclass(frozen=True)
class Metric:
    """A named scoring function with its target type and direction."""
    name: str
    func: Callable[[np.ndarray, np.ndarray], float]
    task_type: TaskType
    minimize: bool = True

    def better(self, candidate: float, incumbent: float) -> bool:
        return candidate < incumbent if self.minimize else candidate > incumbent


def _rmse(y_true, y_pred) -> float:
    return float(np.sqrt(mean_squared_error(y_true, y_pred)))


def _classification_error(y_true, y_pred) -> float:
    return 1.0 - accuracy_score(y_true, y_pred)


def _f1_macro(y_true, y_pred) -> float:
    return f1_score(y_true, y_pred, average="macro", zero_division=0)


class MetricRegistry:
    """Registry mapping a metric name to its ``Metric``."""

    def __init__(self, metrics: Optional[Iterable[Metric]] = None):
        self._metrics: Dict[str, Metric] = {}
        for metric in metrics or ():
            self.register(metric)

    def register(self, metric: Metric) -> None:
        self._metrics[metric.name.lower()] = metric

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._metrics

    def names(self, task_type: Optional[TaskType] = None) -> List[str]:
        return sorted(n for n, m in self._metrics.items() if task_type is None or m.task_type == task_type)

    def get(self, name: str) -> Metric:
        try:
            return self._metrics[name.lower()]
        except KeyError:
            raise MetricError(f"unknown metric; available: {', '.join(self.names())}",
                              operation="score", value=name) from None


def default_metrics() -> MetricRegistry:
    """A registry populated with the built-in metrics."""
    return MetricRegistry([
        Metric("mse", mean_squared_error, TaskType.REGRESSION),
        Metric("rmse", _rmse, TaskType.REGRESSION),
        Metric("mae", mean_absolute_error, TaskType.REGRESSION),
        Metric("r2", r2_score, TaskType.REGRESSION, minimize=False),
        Metric("accuracy", accuracy_score, TaskType.CLASSIFICATION, minimize=False),
        Metric("ce", _classification_error, TaskType.CLASSIFICATION),
        Metric("balanced_accuracy", balanced_accuracy_score, TaskType.CLASSIFICATION, minimize=False),
        Metric("f1_macro", _f1_macro, TaskType.CLASSIFICATION, minimize=False),
    ])


class MetricsCalculator:
    """Calculator scoring predictions with registered metrics."""

    def __init__(self, registry: Optional[MetricRegistry] = None):
        self.registry = registry if registry is not None else default_metrics()
        self.logger = get_logger("MetricsCalculator")

    def resolve(self, metric: Any) -> Metric:
        return metric if isinstance(metric, Metric) else self.registry.get(metric)

    def infer_task_type(self, actuals: np.ndarray) -> TaskType:
        """Classify the actuals as a regression or classification target."""
        if not np.issubdtype(actuals.dtype, np.number) or actuals.dtype == bool:
            return TaskType.CLASSIFICATION
        kind = type_of_target(actuals)
        return TaskType.REGRESSION if kind.startswith("continuous") else TaskType.CLASSIFICATION

    def check_compatible(self, metric: Metric, task_type: TaskType, actuals: Optional[np.ndarray] = None) -> None:
        """
        Raise ``MetricError`` when ``metric`` cannot score a target of ``task_type``.

        Classification metrics need a discrete target. Regression metrics need a
        numeric target; integer-valued numeric targets are accepted because a
        numeric target with few distinct values is still a regression target.
        """
        if metric.task_type == TaskType.CLASSIFICATION and task_type == TaskType.REGRESSION:
            raise MetricError(f"metric '{metric.name}' needs a categorical target, got a continuous one",
                              operation="score", value=metric.name)
        if metric.task_type == TaskType.REGRESSION and task_type == TaskType.CLASSIFICATION:
            numeric = actuals is not None and np.issubdtype(actuals.dtype, np.number) and actuals.dtype != bool
            if not numeric:
                raise MetricError(f"metric '{metric.name}' needs a numeric target, got a categorical one",
                                  operation="score", value=metric.name)

    def score(
        self,
        predictions: Sequence[Any],
        actuals: Sequence[Any],
        metric: Any,
        task_type: Optional[TaskType] = None
    ) -> float:
        """
        Score predictions against actual values.

        Args:
            predictions: Predicted values, aligned with ``actuals``
            actuals: True target values
            metric: Metric name or ``Metric``
            task_type: Target type; inferred from ``actuals`` when omitted.
                Pass it explicitly when scoring a task, so that a regression
                metric on a classification task is rejected even for numeric
                class labels.

        Raises:
            MetricError: On unknown metric, metric/target mismatch, empty or
                misaligned input
        """
        metric = self.resolve(metric)
        predictions = np.asarray(predictions)
        actuals = np.asarray(actuals)

        if actuals.size == 0:
            raise MetricError("no values to score", operation="score", value=metric.name)
        if predictions.shape[0] != actuals.shape[0]:
            raise MetricError(f"{predictions.shape[0]} predictions for {actuals.shape[0]} actuals",
                              operation="score", value=metric.name)

        if task_type is None:
            self.check_compatible(metric, self.infer_task_type(actuals), actuals)
        elif metric.task_type != task_type:
            raise MetricError(f"'{metric.name}' is a {metric.task_type.value} metric, the task is {task_type.value}",
                              operation="score", value=metric.name)

        try:
            return float(metric.func(actuals, predictions))
        except (TypeError, ValueError) as e:
            raise MetricError(f"{type(e).__name__}: {e}", operation="score", value=metric.name) from e

    def calculate_metrics(
        self,
        predictions: Sequence[Any],
        actuals: Sequence[Any],
        task_type: TaskType
    ) -> Dict[str, float]:
        """Score with every registered metric compatible with ``task_type``."""
        return {
            name: self.score(predictions, actuals, name, task_type)
            for name in self.registry.names(task_type)
        }
