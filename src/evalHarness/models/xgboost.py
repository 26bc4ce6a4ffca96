"""
XGBoost learner for evalHarness.
"""

from typing import Any
from xgboost import XGBClassifier, XGBRegressor

from .base_model import BaseModel
from ..core.base import TaskType


class XGBoostLearner(BaseModel):
    """Gradient boosted trees via XGBoost."""

    name = "xgboost"
    param_names = (
        "n_estimators", "learning_rate", "max_depth", "subsample",
        "colsample_bytree", "reg_alpha", "reg_lambda", "random_state", "n_jobs",
    )

    def _build_estimator(self) -> Any:
        params = {
            "n_estimators": 100,
            "learning_rate": 0.1,
            "max_depth": 6,
            "random_state": 42,
            "n_jobs": 1,
            "verbosity": 0,
            **self.params,
        }
        if self.task_type == TaskType.REGRESSION:
            return XGBRegressor(**params)
        return XGBClassifier(**params)
