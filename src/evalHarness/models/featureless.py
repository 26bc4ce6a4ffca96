"""
Featureless baseline learner for evalHarness.

Ignores the features entirely and predicts a constant learned from the
training target: the mean (or median) for regression, the most frequent
class for classification.
"""

from typing import Any
from sklearn.dummy import DummyClassifier, DummyRegressor

from .base_model import BaseModel
from ..core.base import TaskType


class FeaturelessLearner(BaseModel):
    """Constant-prediction baseline."""

    name = "featureless"
    param_names = ("strategy",)

    def _build_estimator(self) -> Any:
        if self.task_type == TaskType.REGRESSION:
            return DummyRegressor(strategy=self.params.get("strategy", "mean"))
        return DummyClassifier(strategy=self.params.get("strategy", "most_frequent"))
