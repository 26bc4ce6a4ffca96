"""
Task definition for evalHarness.

A Task binds a tabular dataset to a designated target column and records the
semantic type of every column. Tasks are values: every structural operation
(select, filter, append) returns a new, independently owned Task and leaves
the receiver untouched.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
import copy

import numpy as np
import pandas as pd

from .base import ColumnType, TaskType
from .exceptions import SchemaError
from ..data.validator import DataValidator
from ..utils.logger import get_logger

logger = get_logger("Task")

_AGGREGATIONS = ("median", "mean", "min", "max", "sum", "count")


def infer_column_type(series: pd.Series) -> ColumnType:
    """Map a pandas dtype to a semantic column type."""
    if isinstance(series.dtype, pd.CategoricalDtype):
        return ColumnType.ORDINAL if series.dtype.ordered else ColumnType.CATEGORICAL
    if pd.api.types.is_bool_dtype(series):
        return ColumnType.CATEGORICAL
    if pd.api.types.is_numeric_dtype(series):
        return ColumnType.NUMERIC
    return ColumnType.CATEGORICAL


def _coerce_column_types(column_types: Optional[Mapping[str, Any]]) -> Dict[str, ColumnType]:
    coerced = {}
    for column, column_type in (column_types or {}).items():
        if isinstance(column_type, ColumnType):
            coerced[column] = column_type
            continue
        try:
            coerced[column] = ColumnType(column_type)
        except ValueError:
            raise SchemaError(f"unknown column type for '{column}'", operation="create", value=column_type) from None
    return coerced


class Task:
    """
    Immutable handle around a rectangular dataset with a designated target.

    Use ``Task.create`` rather than the constructor; the constructor trusts
    its arguments and is reserved for derived tasks.
    """

    def __init__(self, data: pd.DataFrame, target: str, column_types: Dict[str, ColumnType]):
        self._data = data
        self._target = target
        self._column_types = column_types

    @classmethod
    def create(
        cls,
        data: pd.DataFrame,
        target: str,
        column_types: Optional[Mapping[str, Union[ColumnType, str]]] = None
    ) -> 'Task':
        """
        Create a task from raw tabular data.

        Args:
            data: Table with named columns; it is copied, never referenced.
            target: Name of the target column.
            column_types: Optional semantic type overrides, by column name.

        Raises:
            SchemaError: If the target is missing, the data is empty, or a
                column type override is invalid.
        """
        explicit = _coerce_column_types(column_types)
        DataValidator().validate(data, target, explicit)

        frame = data.reset_index(drop=True).copy(deep=True)
        types = {column: explicit.get(column, infer_column_type(frame[column])) for column in frame.columns}
        task = cls(frame, target, types)
        logger.debug(f"Task created | rows={task.n_rows} | features={len(task.feature_names)} | "
                     f"target={target} | type={task.task_type.value}")
        return task

    # ------------------------------------------------------------------
    # read accessors
    # ------------------------------------------------------------------

    @property
    def target(self) -> str:
        return self._target

    @property
    def column_names(self) -> List[str]:
        return list(self._data.columns)

    @property
    def feature_names(self) -> List[str]:
        return [column for column in self._data.columns if column != self._target]

    @property
    def column_types(self) -> Dict[str, ColumnType]:
        return {column: self._column_types[column] for column in self._data.columns}

    @property
    def feature_types(self) -> Dict[str, ColumnType]:
        return {column: self._column_types[column] for column in self.feature_names}

    @property
    def task_type(self) -> TaskType:
        if self._column_types[self._target] == ColumnType.NUMERIC:
            return TaskType.REGRESSION
        return TaskType.CLASSIFICATION

    @property
    def n_rows(self) -> int:
        return int(self._data.shape[0])

    def __len__(self) -> int:
        return self.n_rows

    @property
    def data(self) -> pd.DataFrame:
        """A copy of the full backing table."""
        return self._data.copy(deep=True)

    def features(self, rows: Optional[Sequence[int]] = None) -> pd.DataFrame:
        """Copy of the feature columns, optionally restricted to row positions."""
        frame = self._data[self.feature_names]
        if rows is not None:
            frame = frame.iloc[self._check_rows(rows, "features")]
        return frame.reset_index(drop=True).copy(deep=True)

    def target_values(self, rows: Optional[Sequence[int]] = None) -> np.ndarray:
        """Copy of the target column as an array, optionally restricted to row positions."""
        series = self._data[self._target]
        if rows is not None:
            series = series.iloc[self._check_rows(rows, "target_values")]
        return series.to_numpy(copy=True)

    def __repr__(self) -> str:
        return (f"Task(target={self._target!r}, type={self.task_type.value}, "
                f"rows={self.n_rows}, features={len(self.feature_names)})")

    # ------------------------------------------------------------------
    # structural operations, each returns a new Task
    # ------------------------------------------------------------------

    def clone(self) -> 'Task':
        """Independent deep copy of this task."""
        return Task(self._data.copy(deep=True), self._target, copy.deepcopy(self._column_types))

    def select(self, feature_names: Sequence[str]) -> 'Task':
        """Restrict the feature set to the given ordered subset."""
        feature_names = list(feature_names)
        if not feature_names:
            raise SchemaError("at least one feature must be selected", operation="select")
        if self._target in feature_names:
            raise SchemaError("cannot select the target as a feature", operation="select", value=self._target)
        unknown = [name for name in feature_names if name not in self._column_types or name not in self._data.columns]
        if unknown:
            raise SchemaError("unknown feature names", operation="select", value=unknown)
        if len(set(feature_names)) != len(feature_names):
            raise SchemaError("duplicate feature names", operation="select", value=feature_names)

        columns = feature_names + [self._target]
        types = {column: self._column_types[column] for column in columns}
        return Task(self._data[columns].copy(deep=True), self._target, types)

    def drop_features(self, feature_names: Sequence[str]) -> 'Task':
        """Remove the given features, keeping the remaining ones in order."""
        unknown = [name for name in feature_names if name not in self.feature_names]
        if unknown:
            raise SchemaError("unknown feature names", operation="drop_features", value=unknown)
        return self.select([name for name in self.feature_names if name not in set(feature_names)])

    def filter(self, row_ids: Sequence[int]) -> 'Task':
        """Restrict rows to the given ordered positions; rows are renumbered from zero."""
        positions = self._check_rows(row_ids, "filter")
        if positions.size == 0:
            raise SchemaError("row selection is empty", operation="filter")
        frame = self._data.iloc[positions].reset_index(drop=True).copy(deep=True)
        return Task(frame, self._target, copy.deepcopy(self._column_types))

    def append_column(
        self,
        name: str,
        values: Union[Sequence[Any], np.ndarray, pd.Series],
        column_type: Optional[Union[ColumnType, str]] = None
    ) -> 'Task':
        """Add an engineered feature aligned by row position."""
        if name in self._data.columns:
            raise SchemaError("column already exists", operation="append_column", value=name)
        if isinstance(values, pd.Series):
            values = values.reset_index(drop=True)
        column = pd.Series(values, name=name)
        if len(column) != self.n_rows:
            raise SchemaError(f"expected {self.n_rows} values, got {len(column)}",
                              operation="append_column", value=name)

        if column_type is None:
            resolved = infer_column_type(column)
        else:
            resolved = _coerce_column_types({name: column_type})[name]

        frame = self._data.copy(deep=True)
        frame[name] = column.values
        # keep the target as the last column
        frame = frame[self.feature_names + [name, self._target]]
        types = copy.deepcopy(self._column_types)
        types[name] = resolved
        return Task(frame, self._target, types)

    def append_group_aggregate(self, name: str, by: str, of: str, agg: str = "median") -> 'Task':
        """
        Add a feature holding, for each row, the aggregate of column ``of``
        over all rows sharing the same value of column ``by``.
        """
        for column in (by, of):
            if column not in self._data.columns:
                raise SchemaError("unknown column", operation="append_group_aggregate", value=column)
        if agg not in _AGGREGATIONS:
            raise SchemaError("unsupported aggregation", operation="append_group_aggregate", value=agg)
        if self._column_types[of] != ColumnType.NUMERIC and agg != "count":
            raise SchemaError(f"column '{of}' is not numeric", operation="append_group_aggregate", value=of)

        values = self._data.groupby(by, observed=True, sort=False)[of].transform(agg)
        return self.append_column(name, values.to_numpy(), ColumnType.NUMERIC)

    def append_lookup(
        self,
        name: str,
        key: str,
        lookup: Union[Mapping[Any, Any], pd.Series, pd.DataFrame],
        keep: str = "first",
        default: Any = None,
        column_type: Optional[Union[ColumnType, str]] = None
    ) -> 'Task':
        """
        Join an external key -> value table onto the rows by column ``key``.

        ``lookup`` is a mapping, a Series indexed by key, or a two-column
        DataFrame (key, value). When the table holds a key more than once,
        ``keep`` selects the ``"first"`` or ``"last"`` occurrence. Keys absent
        from the table take ``default``; without a default they are an error.
        """
        if key not in self._data.columns:
            raise SchemaError("unknown key column", operation="append_lookup", value=key)
        if keep not in ("first", "last"):
            raise SchemaError("keep must be 'first' or 'last'", operation="append_lookup", value=keep)

        if isinstance(lookup, pd.DataFrame):
            if lookup.shape[1] != 2:
                raise SchemaError("lookup frame must have exactly two columns", operation="append_lookup",
                                  value=list(lookup.columns))
            lookup = pd.Series(lookup.iloc[:, 1].to_numpy(), index=lookup.iloc[:, 0].to_numpy())
        elif not isinstance(lookup, pd.Series):
            lookup = pd.Series(dict(lookup))

        n_duplicates = int(lookup.index.duplicated().sum())
        if n_duplicates:
            logger.info(f"append_lookup | {n_duplicates} duplicate keys resolved with keep={keep}")
        lookup = lookup[~lookup.index.duplicated(keep=keep)]

        keys = self._data[key].astype(object)
        missing = sorted(set(keys[~keys.isin(lookup.index)].tolist()), key=str)
        if missing and default is None:
            raise SchemaError("keys missing from lookup", operation="append_lookup", value=missing)

        values = keys.map(lookup)
        if missing:
            values = values.where(keys.isin(lookup.index), default)
        return self.append_column(name, values.to_numpy(), column_type)

    # ------------------------------------------------------------------

    def _check_rows(self, row_ids: Sequence[int], operation: str) -> np.ndarray:
        positions = np.asarray(row_ids)
        if positions.size == 0:
            return positions.astype(np.int64)
        if not np.issubdtype(positions.dtype, np.integer):
            raise SchemaError("row ids must be integers", operation=operation, value=str(positions.dtype))
        positions = positions.astype(np.int64).ravel()
        out_of_range = positions[(positions < 0) | (positions >= self.n_rows)]
        if out_of_range.size:
            raise SchemaError(f"row ids out of range [0, {self.n_rows})", operation=operation,
                              value=out_of_range[:10].tolist())
        return positions
