"""
Gaussian Naive Bayes learner for evalHarness.
"""

from typing import Any
from sklearn.naive_bayes import GaussianNB

from .base_model import BaseModel
from ..core.base import TaskType


class GaussianNBLearner(BaseModel):
    """Gaussian Naive Bayes (classification only)."""

    name = "gaussian_nb"
    task_types = (TaskType.CLASSIFICATION,)
    param_names = ("var_smoothing",)

    def _build_estimator(self) -> Any:
        return GaussianNB(**self.params)
