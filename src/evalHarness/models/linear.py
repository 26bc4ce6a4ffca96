"""
Linear learners for evalHarness.

This module contains ordinary least squares, the LASSO (L1 penalty, for both
regression and classification) and plain logistic regression.
"""

from typing import Any
from sklearn.linear_model import Lasso, LinearRegression, LogisticRegression

from .base_model import BaseModel
from ..core.base import TaskType


class LinearRegressionLearner(BaseModel):
    """Ordinary least squares."""

    name = "linear_regression"
    task_types = (TaskType.REGRESSION,)
    param_names = ("fit_intercept",)

    def _build_estimator(self) -> Any:
        return LinearRegression(**self.params)


class LassoLearner(BaseModel):
    """
    LASSO learner.

    Regression uses ``Lasso(alpha)``; classification uses an L1-penalised
    ``LogisticRegression`` with ``C = 1 / alpha`` so that ``alpha`` means the
    same thing for both task types.
    """

    name = "lasso"
    scale_numeric = True
    param_names = ("alpha", "max_iter", "tol", "random_state")

    def _build_estimator(self) -> Any:
        alpha = float(self.params.get("alpha", 1.0))
        max_iter = int(self.params.get("max_iter", 5000))
        tol = float(self.params.get("tol", 1e-4))
        random_state = self.params.get("random_state", 42)
        if self.task_type == TaskType.REGRESSION:
            return Lasso(alpha=alpha, max_iter=max_iter, tol=tol, random_state=random_state)
        return LogisticRegression(
            l1_ratio=1.0,
            solver="saga",
            C=1.0 / alpha,
            max_iter=max_iter,
            tol=tol,
            random_state=random_state,
        )


class LogisticRegressionLearner(BaseModel):
    """L2-penalised logistic regression."""

    name = "logistic_regression"
    task_types = (TaskType.CLASSIFICATION,)
    scale_numeric = True
    param_names = ("C", "max_iter", "random_state")

    def _build_estimator(self) -> Any:
        params = {"max_iter": 1000, "random_state": 42, **self.params}
        return LogisticRegression(**params)
