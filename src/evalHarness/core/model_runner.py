"""
Model runner for evalHarness.

Fits a learner configuration on the training rows of a task and predicts the
held-out rows. The runner resolves learners through an injected registry and
never touches global state.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union
import warnings

import numpy as np
from sklearn.exceptions import ConvergenceWarning

from .base import BaseLearner, ColumnType, ModelConfig, TaskType
from .exceptions import FitError, PredictError
from .task import Task
from ..models import ModelRegistry, default_registry
from ..utils.helpers import load_object, save_object
from ..utils.logger import get_logger


@dataclass
class FittedModel:
    """A fitted learner plus the schema of the task it was trained on."""
    config: ModelConfig
    learner: BaseLearner
    feature_names: List[str]
    feature_types: Dict[str, ColumnType]
    task_type: TaskType
    target: str
    n_train: int

    def feature_importance(self) -> Optional[Dict[str, float]]:
        """Importance per encoded feature, when the learner provides it."""
        importance = self.learner.get_feature_importance()
        if importance is None:
            return None
        names = self.learner.get_encoded_feature_names()
        if names is None or len(names) != len(importance):
            names = self.feature_names
        return dict(zip(names, (float(v) for v in importance)))


class ModelRunner:
    """Fits and applies learner configurations on tasks."""

    def __init__(self, registry: Optional[ModelRegistry] = None):
        self.registry = registry if registry is not None else default_registry()
        self.logger = get_logger("ModelRunner")

    def fit(self, task: Task, train_idx: Sequence[int], config: ModelConfig) -> FittedModel:
        """
        Fit ``config`` on the rows ``train_idx`` of ``task``.

        Raises:
            FitError: If the learner is unknown or the estimator fails to fit,
                including non-convergence.
            ConfigError: If the configuration names unrecognized
                hyperparameters or the learner does not support the task type.
        """
        if config.name not in self.registry:
            raise FitError(f"unknown learner; available: {', '.join(self.registry.names())}",
                           operation="fit", value=config.name)
        learner = self.registry.create(config, task.task_type)

        X = task.features(train_idx)
        y = task.target_values(train_idx)
        if len(y) == 0:
            raise FitError("no training rows", operation="fit", value=config.label)

        try:
            with warnings.catch_warnings():
                warnings.simplefilter("error", ConvergenceWarning)
                learner.fit(X, y, task.feature_types)
        except Exception as e:
            raise FitError(f"{type(e).__name__}: {e}", operation="fit", value=config.label) from e

        self.logger.debug(f"Fit | learner={config.label} | rows={len(y)} | features={X.shape[1]}")
        return FittedModel(
            config=config,
            learner=learner,
            feature_names=task.feature_names,
            feature_types=task.feature_types,
            task_type=task.task_type,
            target=task.target,
            n_train=len(y),
        )

    def predict(self, model: FittedModel, task: Task, test_idx: Sequence[int]) -> np.ndarray:
        """
        Predict the rows ``test_idx`` of ``task``; the result is aligned with ``test_idx``.

        Raises:
            PredictError: If the task's feature schema differs from the one
                the model was trained on, or the estimator fails.
        """
        if task.feature_names != model.feature_names:
            raise PredictError("feature set or order differs from the training task", operation="predict",
                               value={"expected": model.feature_names, "got": task.feature_names})
        if task.feature_types != model.feature_types:
            raise PredictError("feature types differ from the training task", operation="predict",
                               value=sorted(n for n in model.feature_names
                                            if task.feature_types[n] != model.feature_types[n]))

        X = task.features(test_idx)
        if X.shape[0] == 0:
            return np.empty(0, dtype=task.target_values().dtype)
        try:
            predictions = model.learner.predict(X)
        except Exception as e:
            raise PredictError(f"{type(e).__name__}: {e}", operation="predict", value=model.config.label) from e
        return np.asarray(predictions).ravel()

    def fit_predict(
        self,
        task: Task,
        train_idx: Sequence[int],
        test_idx: Sequence[int],
        config: ModelConfig
    ) -> np.ndarray:
        return self.predict(self.fit(task, train_idx, config), task, test_idx)


def save_model(model: FittedModel, path: Union[str, Path]) -> None:
    """Persist a fitted model with joblib."""
    save_object(model, path)


def load_model(path: Union[str, Path]) -> FittedModel:
    """Load a model written by ``save_model``."""
    model = load_object(path)
    if not isinstance(model, FittedModel):
        raise PredictError("file does not contain a fitted model", operation="load_model", value=str(path))
    return model
