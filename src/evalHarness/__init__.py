"""
evalHarness: resampled evaluation of tabular learners.

Core building blocks are the ``Task`` (an immutable table with a target),
the resampling functions, the ``ModelRunner`` and the ``Evaluator``, which
scores, compares, tunes and filters learner configurations.
"""

__version__ = "1.0.0"

from .core import (
    Budget,
    ColumnType,
    ConfigError,
    ConfigSpace,
    Evaluator,
    FitError,
    HarnessError,
    MetricError,
    ModelConfig,
    ModelRunner,
    ParamRange,
    PredictError,
    SchemaError,
    SplitStrategy,
    Task,
    TaskType,
    TuningResult,
    k_fold,
    train_test_split,
)
from .models import ModelRegistry, default_registry
from .evaluation import MetricsCalculator

__all__ = [
    "__version__",
    "Budget",
    "ColumnType",
    "ConfigError",
    "ConfigSpace",
    "Evaluator",
    "FitError",
    "HarnessError",
    "MetricError",
    "ModelConfig",
    "ModelRunner",
    "ParamRange",
    "PredictError",
    "SchemaError",
    "SplitStrategy",
    "Task",
    "TaskType",
    "TuningResult",
    "k_fold",
    "train_test_split",
    "ModelRegistry",
    "default_registry",
    "MetricsCalculator",
]
