"""
Learner implementations for evalHarness.

This module contains the learner classes and the registry that resolves a
learner name to its implementation.
"""

from typing import Dict, Iterable, List, Optional, Type

from .base_model import BaseModel
from .featureless import FeaturelessLearner
from .decision_tree import DecisionTreeLearner
from .random_forest import RandomForestLearner
from .linear import LinearRegressionLearner, LassoLearner, LogisticRegressionLearner
from .knn import KNNLearner
from .svm import SVMLearner
from .gaussian_nb import GaussianNBLearner
from .xgboost import XGBoostLearner
from ..core.base import BaseLearner, ModelConfig, TaskType
from ..core.exceptions import ConfigError


class ModelRegistry:
    """Registry mapping a learner name to its implementation."""

    def __init__(self, learners: Optional[Iterable[Type[BaseLearner]]] = None):
        self._learners: Dict[str, Type[BaseLearner]] = {}
        for learner in learners or ():
            self.register(learner)

    def register(self, learner: Type[BaseLearner], name: Optional[str] = None) -> None:
        """Register a learner class under ``name`` (defaults to ``learner.name``)."""
        key = (name or learner.name).lower()
        if not key:
            raise ConfigError("learner has no name", operation="register", value=learner.__name__)
        self._learners[key] = learner

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._learners

    def names(self) -> List[str]:
        return sorted(self._learners)

    def get(self, name: str) -> Type[BaseLearner]:
        try:
            return self._learners[name.lower()]
        except KeyError:
            raise ConfigError(f"unknown learner; available: {', '.join(self.names())}",
                              operation="get", value=name) from None

    def validate(self, config: ModelConfig, task_type: TaskType) -> None:
        """Raise ``ConfigError`` if ``config`` names unknown parameters or an unsupported task type."""
        self.validate_params(config.name, config.hyperparameters, task_type)

    def validate_params(self, name: str, params: Iterable[str], task_type: Optional[TaskType] = None) -> None:
        learner = self.get(name)
        unknown = sorted(set(params) - set(learner.param_names))
        if unknown:
            raise ConfigError(f"unrecognized hyperparameters for '{name}'; recognized: {list(learner.param_names)}",
                              operation="validate", value=unknown)
        if task_type is not None and task_type not in learner.task_types:
            raise ConfigError(f"learner '{name}' does not support {task_type.value} tasks",
                              operation="validate", value=name)

    def create(self, config: ModelConfig, task_type: TaskType) -> BaseLearner:
        """Create an unfitted learner instance for ``config``."""
        self.validate(config, task_type)
        return self.get(config.name)(task_type, **config.hyperparameters)


def default_registry() -> ModelRegistry:
    """A registry populated with every built-in learner."""
    return ModelRegistry([
        FeaturelessLearner,
        DecisionTreeLearner,
        RandomForestLearner,
        LinearRegressionLearner,
        LassoLearner,
        LogisticRegressionLearner,
        KNNLearner,
        SVMLearner,
        GaussianNBLearner,
        XGBoostLearner,
    ])


__all__ = [
    "BaseModel",
    "FeaturelessLearner",
    "DecisionTreeLearner",
    "RandomForestLearner",
    "LinearRegressionLearner",
    "LassoLearner",
    "LogisticRegressionLearner",
    "KNNLearner",
    "SVMLearner",
    "GaussianNBLearner",
    "XGBoostLearner",
    "ModelRegistry",
    "default_registry",
]
