"""
Decision tree learner for evalHarness.

CART regression/classification tree; ``ccp_alpha`` plays the role of the
complexity parameter used to prune the tree.
"""

from typing import Any
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor

from .base_model import BaseModel
from ..core.base import TaskType


class DecisionTreeLearner(BaseModel):
    """CART decision tree."""

    name = "decision_tree"
    param_names = ("max_depth", "min_samples_split", "min_samples_leaf", "ccp_alpha", "random_state")

    def _build_estimator(self) -> Any:
        params = {"random_state": 42, **self.params}
        if self.task_type == TaskType.REGRESSION:
            return DecisionTreeRegressor(**params)
        return DecisionTreeClassifier(**params)
