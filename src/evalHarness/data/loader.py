"""
Data loading utilities for evalHarness.

This module reads tabular files into a Task.
"""

from typing import Any, Dict, List, Optional, Union
from pathlib import Path
import pandas as pd

from ..core.base import ColumnType
from ..core.task import Task
from ..utils.logger import get_logger


class DataLoader:
    """Loads CSV files into tasks."""

    def __init__(self):
        self.logger = get_logger("DataLoader")

    def load_csv(
        self,
        path: Union[str, Path],
        target: str,
        column_types: Optional[Dict[str, Union[ColumnType, str]]] = None,
        ordinal_levels: Optional[Dict[str, List[Any]]] = None,
        drop_columns: Optional[List[str]] = None,
        **read_kwargs
    ) -> Task:
        """
        Load a CSV file as a task.

        Args:
            path: CSV file path
            target: Name of the target column
            column_types: Semantic type overrides, by column name
            ordinal_levels: Ordered levels for ordinal columns; the column is
                converted to an ordered categorical with these levels
            drop_columns: Columns to discard before building the task (ids, raw dates)
            **read_kwargs: Passed through to ``pandas.read_csv``

        Returns:
            The loaded task
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        self.logger.info(f"Loading data from {path}")
        data = pd.read_csv(path, **read_kwargs)

        if drop_columns:
            data = data.drop(columns=drop_columns)

        column_types = dict(column_types or {})
        for column, levels in (ordinal_levels or {}).items():
            if column not in data.columns:
                raise ValueError(f"Ordinal column not found in {path.name}: {column}")
            data[column] = pd.Categorical(data[column], categories=levels, ordered=True)
            column_types.setdefault(column, ColumnType.ORDINAL)

        task = Task.create(data, target, column_types)
        self.logger.info(f"Data loaded: {task.n_rows} rows, {len(task.feature_names)} features, "
                         f"target={target} ({task.task_type.value})")
        return task
