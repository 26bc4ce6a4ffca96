"""
K-Nearest Neighbors learner for evalHarness.
"""

from typing import Any
from sklearn.neighbors import KNeighborsClassifier, KNeighborsRegressor

from .base_model import BaseModel
from ..core.base import TaskType


class KNNLearner(BaseModel):
    """k-nearest neighbours on standardized numeric features."""

    name = "knn"
    scale_numeric = True
    param_names = ("n_neighbors", "weights", "p")

    def _build_estimator(self) -> Any:
        params = {"n_neighbors": 5, **self.params}
        if self.task_type == TaskType.REGRESSION:
            return KNeighborsRegressor(**params)
        return KNeighborsClassifier(**params)
