"""
Resampling strategies for evalHarness.

Every function builds its own seeded scikit-learn splitter, so the same
(row count, parameters, seed) always yields the same partition regardless of
what ran before. No global random state is read or written.
"""

import math
from typing import List, Optional, Tuple

import numpy as np
from sklearn.model_selection import (
    KFold,
    LeaveOneGroupOut,
    RepeatedKFold,
    StratifiedKFold,
    train_test_split as sk_train_test_split,
)

from .base import CVStrategy, Split, TaskType
from .exceptions import ConfigError
from .task import Task
from ..utils.logger import get_logger

logger = get_logger("SplitStrategy")

# absorbs representation error such as 0.7 * 150 == 104.99999999999999
_ROUNDING_EPS = 1e-9


def holdout_sizes(n_rows: int, fraction: float) -> Tuple[int, int]:
    """
    Train/test sizes for a holdout split.

    ``n_train = floor(fraction * n_rows)`` (with a tiny tolerance for floating
    point representation) and ``n_test = n_rows - n_train``.
    """
    n_train = int(math.floor(fraction * n_rows + _ROUNDING_EPS))
    return n_train, n_rows - n_train


def _as_split(train_idx, test_idx) -> Split:
    return np.asarray(train_idx, dtype=np.int64), np.asarray(test_idx, dtype=np.int64)


def train_test_split(task: Task, fraction: float, seed: Optional[int] = None) -> Split:
    """
    Shuffle the rows and split them into train and test index sets.

    Args:
        task: Task whose rows are split
        fraction: Share of rows used for training, in the open interval (0, 1)
        seed: Random seed

    Raises:
        ConfigError: If ``fraction`` is outside (0, 1) or leaves a side empty
    """
    if not 0.0 < fraction < 1.0:
        raise ConfigError("fraction must lie in (0, 1)", operation="train_test_split", value=fraction)
    n_train, n_test = holdout_sizes(task.n_rows, fraction)
    if n_train == 0 or n_test == 0:
        raise ConfigError(f"fraction leaves an empty side for {task.n_rows} rows",
                          operation="train_test_split", value=fraction)

    train_idx, test_idx = sk_train_test_split(
        np.arange(task.n_rows),
        train_size=n_train,
        test_size=n_test,
        random_state=seed,
        shuffle=True,
    )
    logger.debug(f"Holdout | rows={task.n_rows} | train={n_train} | test={n_test} | seed={seed}")
    return _as_split(train_idx, test_idx)


def _check_k(task: Task, k: int, operation: str) -> None:
    if not isinstance(k, (int, np.integer)) or isinstance(k, bool) or k < 2:
        raise ConfigError("k must be an integer >= 2", operation=operation, value=k)
    if k > task.n_rows:
        raise ConfigError(f"k exceeds the number of rows ({task.n_rows})", operation=operation, value=k)


def k_fold(task: Task, k: int, seed: Optional[int] = None) -> List[Split]:
    """
    Partition the rows into ``k`` shuffled folds.

    Each row appears in exactly one test fold; the test folds together cover
    every row.
    """
    _check_k(task, k, "k_fold")
    cv = KFold(n_splits=k, shuffle=True, random_state=seed)
    splits = [_as_split(train, test) for train, test in cv.split(np.arange(task.n_rows))]
    logger.debug(f"KFold | rows={task.n_rows} | k={k} | seed={seed}")
    return splits


def stratified_k_fold(task: Task, k: int, seed: Optional[int] = None) -> List[Split]:
    """K folds preserving the class proportions of a classification target."""
    _check_k(task, k, "stratified_k_fold")
    if task.task_type != TaskType.CLASSIFICATION:
        raise ConfigError("stratification needs a classification task", operation="stratified_k_fold",
                          value=task.target)
    y = task.target_values()
    _, counts = np.unique(y.astype(str), return_counts=True)
    if counts.min() < k:
        raise ConfigError(f"smallest class has {counts.min()} rows, fewer than k",
                          operation="stratified_k_fold", value=k)
    cv = StratifiedKFold(n_splits=k, shuffle=True, random_state=seed)
    return [_as_split(train, test) for train, test in cv.split(np.zeros(task.n_rows), y)]


def repeated_k_fold(task: Task, k: int, repeats: int, seed: Optional[int] = None) -> List[Split]:
    """``repeats`` independent k-fold partitions, concatenated in order."""
    _check_k(task, k, "repeated_k_fold")
    if repeats < 1:
        raise ConfigError("repeats must be >= 1", operation="repeated_k_fold", value=repeats)
    cv = RepeatedKFold(n_splits=k, n_repeats=repeats, random_state=seed)
    return [_as_split(train, test) for train, test in cv.split(np.arange(task.n_rows))]


def leave_one_group_out(task: Task, group_column: str) -> List[Split]:
    """One fold per distinct value of ``group_column``; that group is held out."""
    if group_column not in task.column_names:
        raise ConfigError("unknown group column", operation="leave_one_group_out", value=group_column)
    groups = task.data[group_column].astype(str).to_numpy()
    if len(np.unique(groups)) < 2:
        raise ConfigError("at least 2 groups required", operation="leave_one_group_out", value=group_column)
    cv = LeaveOneGroupOut()
    return [_as_split(train, test) for train, test in cv.split(np.zeros(task.n_rows), groups=groups)]


class SplitStrategy:
    """Named resampling strategy, as read from configuration."""

    def __init__(
        self,
        strategy: CVStrategy = CVStrategy.KFOLD,
        folds: int = 5,
        fraction: float = 0.8,
        repeats: int = 1,
        group_column: Optional[str] = None,
        seed: Optional[int] = 42
    ):
        self.strategy = strategy
        self.folds = folds
        self.fraction = fraction
        self.repeats = repeats
        self.group_column = group_column
        self.seed = seed

    @classmethod
    def from_config(cls, resampling: str, **kwargs) -> 'SplitStrategy':
        try:
            strategy = CVStrategy(resampling)
        except ValueError:
            valid = [s.value for s in CVStrategy]
            raise ConfigError(f"unknown resampling; expected one of {valid}", operation="from_config",
                              value=resampling) from None
        return cls(strategy, **kwargs)

    def split(self, task: Task) -> List[Split]:
        if self.strategy == CVStrategy.HOLDOUT:
            return [train_test_split(task, self.fraction, self.seed)]
        elif self.strategy == CVStrategy.KFOLD:
            return k_fold(task, self.folds, self.seed)
        elif self.strategy == CVStrategy.STRATIFIED_KFOLD:
            return stratified_k_fold(task, self.folds, self.seed)
        elif self.strategy == CVStrategy.REPEATED_KFOLD:
            return repeated_k_fold(task, self.folds, self.repeats, self.seed)
        elif self.strategy == CVStrategy.LOGO:
            if not self.group_column:
                raise ConfigError("logo resampling needs a group column", operation="split")
            return leave_one_group_out(task, self.group_column)
        else:
            raise ConfigError("unsupported resampling strategy", operation="split", value=self.strategy)
