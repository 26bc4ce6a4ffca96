"""
Support Vector Machine learner for evalHarness.
"""

from typing import Any
from sklearn.svm import SVC, SVR

from .base_model import BaseModel
from ..core.base import TaskType


class SVMLearner(BaseModel):
    """SVR for regression, SVC for classification."""

    name = "svm"
    scale_numeric = True
    param_names = ("C", "kernel", "gamma", "degree", "epsilon")

    def _build_estimator(self) -> Any:
        params = dict(self.params)
        if self.task_type == TaskType.REGRESSION:
            return SVR(**params)
        # epsilon only shapes the regression loss
        params.pop("epsilon", None)
        return SVC(random_state=42, **params)
