"""
Base classes and value objects for evalHarness.

This module defines the enumerations, configuration dataclasses and abstract
interfaces shared by every component of the harness.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field, replace
from enum import Enum
import math

import numpy as np
import pandas as pd

from .exceptions import ConfigError


class TaskType(Enum):
    """Enumeration of supported task types."""
    CLASSIFICATION = "classification"
    REGRESSION = "regression"


class ColumnType(Enum):
    """Semantic type of a task column."""
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    ORDINAL = "ordinal"


class CVStrategy(Enum):
    """Enumeration of supported resampling strategies."""
    HOLDOUT = "holdout"
    KFOLD = "cv"
    STRATIFIED_KFOLD = "stratified_cv"
    REPEATED_KFOLD = "repeated_cv"
    LOGO = "logo"  # Leave-One-Group-Out


# (train_idx, test_idx)
Split = Tuple[np.ndarray, np.ndarray]


@dataclass(frozen=True)
class ModelConfig:
    """A learner name plus its hyperparameter values."""
    name: str
    hyperparameters: Dict[str, Any] = field(default_factory=dict)

    def with_params(self, **params) -> 'ModelConfig':
        """Return a copy with ``params`` merged over the current values."""
        return replace(self, hyperparameters={**self.hyperparameters, **params})

    @property
    def label(self) -> str:
        if not self.hyperparameters:
            return self.name
        inner = ", ".join(f"{k}={v!r}" for k, v in sorted(self.hyperparameters.items()))
        return f"{self.name}({inner})"


@dataclass(frozen=True)
class ParamRange:
    """
    Search range for a single hyperparameter.

    ``kind`` is one of ``"int"``, ``"float"`` or ``"categorical"``. Numeric
    ranges are inclusive on both ends; ``log`` samples on a log scale and
    requires a positive lower bound.
    """
    kind: str
    low: Optional[float] = None
    high: Optional[float] = None
    choices: Tuple[Any, ...] = ()
    log: bool = False

    @classmethod
    def integer(cls, low: int, high: int, log: bool = False) -> 'ParamRange':
        return cls("int", low=low, high=high, log=log)

    @classmethod
    def real(cls, low: float, high: float, log: bool = False) -> 'ParamRange':
        return cls("float", low=low, high=high, log=log)

    @classmethod
    def categorical(cls, choices: Sequence[Any]) -> 'ParamRange':
        return cls("categorical", choices=tuple(choices))

    @classmethod
    def from_dict(cls, spec: Dict[str, Any]) -> 'ParamRange':
        """Build a range from a config mapping such as ``{"type": "int", "low": 1, "high": 9}``."""
        kind = spec.get("type", "float")
        if kind == "categorical":
            return cls.categorical(spec.get("choices", ()))
        return cls(kind, low=spec.get("low"), high=spec.get("high"), log=bool(spec.get("log", False)))

    def validate(self, name: str) -> None:
        """Raise ``ConfigError`` if the range is malformed."""
        if self.kind == "categorical":
            if not self.choices:
                raise ConfigError("empty choice list", operation="tune", value=name)
            return
        if self.kind not in ("int", "float"):
            raise ConfigError(f"unknown range type for '{name}'", operation="tune", value=self.kind)
        if self.low is None or self.high is None:
            raise ConfigError(f"range for '{name}' needs low and high", operation="tune", value=(self.low, self.high))
        if self.low > self.high:
            raise ConfigError(f"low > high for '{name}'", operation="tune", value=(self.low, self.high))
        if self.log and self.low <= 0:
            raise ConfigError(f"log range for '{name}' needs a positive lower bound", operation="tune", value=self.low)
        if self.kind == "int" and math.ceil(self.low) > math.floor(self.high):
            raise ConfigError(f"integer range for '{name}' contains no integer", operation="tune",
                              value=(self.low, self.high))

    def contains(self, value: Any) -> bool:
        if self.kind == "categorical":
            return value in self.choices
        if self.kind == "int" and int(value) != value:
            return False
        return self.low <= value <= self.high

    def clip(self, value: float) -> Any:
        """Clamp a numeric proposal into the range, rounding for integer ranges."""
        value = min(max(value, self.low), self.high)
        if self.kind == "int":
            return int(min(max(round(value), math.ceil(self.low)), math.floor(self.high)))
        return float(value)


@dataclass(frozen=True)
class ConfigSpace:
    """Search space for tuning: a learner, fixed values and ranges."""
    name: str
    ranges: Dict[str, ParamRange]
    fixed: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        if not self.ranges:
            raise ConfigError("search space has no ranges", operation="tune", value=self.name)
        for param, param_range in self.ranges.items():
            param_range.validate(param)
        overlap = set(self.ranges) & set(self.fixed)
        if overlap:
            raise ConfigError("parameters both fixed and searched", operation="tune", value=sorted(overlap))

    def contains(self, config: ModelConfig) -> bool:
        return all(r.contains(config.hyperparameters[p]) for p, r in self.ranges.items())

    def to_config(self, params: Dict[str, Any]) -> ModelConfig:
        return ModelConfig(self.name, {**self.fixed, **params})


@dataclass(frozen=True)
class Budget:
    """Bound on a tuning run: evaluation count, elapsed seconds, or both."""
    max_evaluations: Optional[int] = None
    max_seconds: Optional[float] = None

    def validate(self) -> None:
        if self.max_evaluations is None and self.max_seconds is None:
            raise ConfigError("budget needs max_evaluations or max_seconds", operation="tune")
        if self.max_evaluations is not None and self.max_evaluations < 1:
            raise ConfigError("max_evaluations must be >= 1", operation="tune", value=self.max_evaluations)
        if self.max_seconds is not None and self.max_seconds < 0:
            raise ConfigError("max_seconds must be >= 0", operation="tune", value=self.max_seconds)


@dataclass(frozen=True)
class ScoreRecord:
    """Score of one configuration on one fold."""
    fold: int
    learner: str
    hyperparameters: Dict[str, Any]
    metric: str
    score: float


@dataclass
class TuningResult:
    """Outcome of a tuning run."""
    best_config: ModelConfig
    best_score: float
    archive: pd.DataFrame
    n_evaluations: int


class BaseLearner(ABC):
    """Interface every registered learner implements."""

    name: str = ""
    task_types: Tuple[TaskType, ...] = (TaskType.REGRESSION, TaskType.CLASSIFICATION)
    param_names: Tuple[str, ...] = ()

    def __init__(self, task_type: TaskType, **params):
        self.task_type = task_type
        self.params = params
        self.is_fitted = False

    @abstractmethod
    def fit(self, X: pd.DataFrame, y: np.ndarray, feature_types: Dict[str, ColumnType]) -> 'BaseLearner':
        """Fit the learner to the training data."""
        pass

    @abstractmethod
    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Make predictions on new data."""
        pass

    def get_feature_importance(self) -> Optional[np.ndarray]:
        """Get feature importance scores, if the estimator provides them."""
        return None

    def get_encoded_feature_names(self) -> Optional[List[str]]:
        """Names matching ``get_feature_importance``, or ``None`` to use the raw columns."""
        return None

    def get_params(self) -> Dict[str, Any]:
        return dict(self.params)


class BaseSearchStrategy(ABC):
    """Proposes hyperparameter values for the tuning loop."""

    def __init__(self, space: ConfigSpace, seed: Optional[int] = None):
        self.space = space
        self.seed = seed

    @abstractmethod
    def ask(self) -> Optional[Dict[str, Any]]:
        """Return the next proposal, or ``None`` when the strategy is exhausted."""
        pass

    def tell(self, params: Dict[str, Any], score: float) -> None:
        """Report the score of a proposal back to the strategy."""
        pass
