"""
Feature filtering for evalHarness.

Ranks the features of a task by a univariate relevance score against the
target and keeps the best ``top_n``.
"""

from typing import List, Optional
import warnings

import numpy as np
import pandas as pd
from sklearn.feature_selection import (
    f_classif,
    f_regression,
    mutual_info_classif,
    mutual_info_regression,
    r_regression,
)
from sklearn.preprocessing import LabelEncoder

from .base import ColumnType, TaskType
from .exceptions import ConfigError
from .task import Task
from ..utils.logger import get_logger


class FeatureSelector:
    """
    Univariate feature filter.

    Methods:
        ``f_test``: ANOVA F statistic (classification) or F-regression
            statistic (regression).
        ``mutual_info``: estimated mutual information with the target.
        ``correlation``: absolute Pearson correlation (regression only).

    Categorical and ordinal features are scored on their integer codes.
    Features with an undefined score, such as constant columns, rank last.
    """

    METHODS = ("f_test", "mutual_info", "correlation")

    def __init__(self, method: str = "f_test", random_state: Optional[int] = 42):
        if method not in self.METHODS:
            raise ConfigError(f"unknown scoring method; expected one of {list(self.METHODS)}",
                              operation="select_features", value=method)
        self.method = method
        self.random_state = random_state
        self.logger = get_logger("FeatureSelector")

    @staticmethod
    def _encode(task: Task) -> pd.DataFrame:
        X = task.features()
        encoded = {}
        for name, column_type in task.feature_types.items():
            column = X[name]
            if column_type == ColumnType.NUMERIC:
                values = column.astype(float)
                encoded[name] = values.fillna(values.median())
            elif isinstance(column.dtype, pd.CategoricalDtype):
                encoded[name] = column.cat.codes.astype(float)
            else:
                encoded[name] = pd.Series(pd.Categorical(column.astype(str)).codes, dtype=float)
        return pd.DataFrame(encoded, columns=task.feature_names)

    def score(self, task: Task) -> pd.Series:
        """Relevance score of every feature, in feature order."""
        X = self._encode(task)
        y = task.target_values()
        regression = task.task_type == TaskType.REGRESSION
        if not regression:
            y = LabelEncoder().fit_transform(y.astype(str))

        discrete = np.array([t != ColumnType.NUMERIC for t in task.feature_types.values()])

        with warnings.catch_warnings():
            # constant columns produce NaN scores with a RuntimeWarning/UserWarning
            warnings.simplefilter("ignore", category=RuntimeWarning)
            warnings.simplefilter("ignore", category=UserWarning)
            if self.method == "f_test":
                scores, _ = (f_regression if regression else f_classif)(X.to_numpy(), y)
            elif self.method == "mutual_info":
                estimator = mutual_info_regression if regression else mutual_info_classif
                scores = estimator(X.to_numpy(), y, discrete_features=discrete, random_state=self.random_state)
            else:
                if not regression:
                    raise ConfigError("correlation scoring needs a regression task",
                                      operation="select_features", value=task.target)
                scores = np.abs(r_regression(X.to_numpy(), y.astype(float)))

        return pd.Series(np.asarray(scores, dtype=float), index=task.feature_names, name=self.method)

    def rank(self, task: Task) -> List[str]:
        """All features, best first; ties keep the original column order."""
        scores = self.score(task).to_numpy()
        scores = np.where(np.isnan(scores), -np.inf, scores)
        order = sorted(range(len(scores)), key=lambda i: (-scores[i], i))
        return [task.feature_names[i] for i in order]

    def select(self, task: Task, top_n: int) -> List[str]:
        """
        The ``top_n`` best features, best first.

        Raises:
            ConfigError: If ``top_n`` is below 1 or exceeds the feature count
        """
        n_features = len(task.feature_names)
        if not isinstance(top_n, (int, np.integer)) or isinstance(top_n, bool) or top_n < 1:
            raise ConfigError("top_n must be a positive integer", operation="select_features", value=top_n)
        if top_n > n_features:
            raise ConfigError(f"top_n exceeds the {n_features} available features",
                              operation="select_features", value=top_n)

        selected = self.rank(task)[:top_n]
        self.logger.info(f"SelectFeatures | method={self.method} | top_n={top_n} | selected={selected}")
        return selected
