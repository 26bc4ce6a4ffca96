"""
Core functionality for evalHarness.

This module contains the task, resampling, model runner and evaluator
components of the harness.
"""

from .base import (
    BaseLearner,
    BaseSearchStrategy,
    Budget,
    ColumnType,
    ConfigSpace,
    CVStrategy,
    ModelConfig,
    ParamRange,
    ScoreRecord,
    TaskType,
    TuningResult,
)
from .exceptions import (
    ConfigError,
    FitError,
    HarnessError,
    MetricError,
    PredictError,
    SchemaError,
)
from .task import Task
from .splitter import (
    SplitStrategy,
    k_fold,
    leave_one_group_out,
    repeated_k_fold,
    stratified_k_fold,
    train_test_split,
)
from .model_runner import FittedModel, ModelRunner, load_model, save_model
from .feature_selector import FeatureSelector
from .hyperparameter_tuner import GridSearch, HyperparameterTuner, OptunaSearch, RandomSearch
from .evaluator import Evaluator

__all__ = [
    "BaseLearner",
    "BaseSearchStrategy",
    "Budget",
    "ColumnType",
    "ConfigSpace",
    "CVStrategy",
    "ModelConfig",
    "ParamRange",
    "ScoreRecord",
    "TaskType",
    "TuningResult",
    "ConfigError",
    "FitError",
    "HarnessError",
    "MetricError",
    "PredictError",
    "SchemaError",
    "Task",
    "SplitStrategy",
    "k_fold",
    "leave_one_group_out",
    "repeated_k_fold",
    "stratified_k_fold",
    "train_test_split",
    "FittedModel",
    "ModelRunner",
    "load_model",
    "save_model",
    "FeatureSelector",
    "GridSearch",
    "HyperparameterTuner",
    "OptunaSearch",
    "RandomSearch",
    "Evaluator",
]
