"""
Random Forest learner for evalHarness.
"""

from typing import Any
from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor

from .base_model import BaseModel
from ..core.base import TaskType


class RandomForestLearner(BaseModel):
    """Random Forest regressor/classifier."""

    name = "random_forest"
    param_names = (
        "n_estimators", "max_depth", "min_samples_split", "min_samples_leaf",
        "max_features", "random_state", "n_jobs",
    )

    def _build_estimator(self) -> Any:
        params = {"n_estimators": 100, "random_state": 42, "n_jobs": 1, **self.params}
        if self.task_type == TaskType.REGRESSION:
            return RandomForestRegressor(**params)
        return RandomForestClassifier(**params)
