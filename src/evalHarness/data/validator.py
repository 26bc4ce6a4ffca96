"""
Data validation utilities for evalHarness.

This module checks raw tabular data before it is wrapped into a Task.
"""

from typing import Dict, Optional
import pandas as pd
import numpy as np

from ..core.base import ColumnType
from ..core.exceptions import SchemaError
from ..utils.logger import get_logger


class DataValidator:
    """Validator for tabular datasets handed to ``Task.create``."""

    def __init__(self):
        self.logger = get_logger("DataValidator")

    def validate(
        self,
        data: pd.DataFrame,
        target: str,
        column_types: Optional[Dict[str, ColumnType]] = None
    ) -> None:
        """
        Validate input data.

        Args:
            data: Raw table (rows x named columns)
            target: Name of the target column
            column_types: Explicit semantic types (optional)

        Raises:
            SchemaError: If data validation fails
        """
        if not isinstance(data, pd.DataFrame):
            raise SchemaError("data must be a pandas DataFrame", operation="create", value=type(data).__name__)

        self._validate_columns(data, target)

        if column_types:
            self._validate_column_types(data, column_types)

        self._check_values(data)

    def _validate_columns(self, data: pd.DataFrame, target: str) -> None:
        if data.shape[0] == 0:
            raise SchemaError("data has zero rows", operation="create")

        if data.columns.duplicated().any():
            duplicated = data.columns[data.columns.duplicated()].tolist()
            raise SchemaError("duplicate column names", operation="create", value=duplicated)

        if target not in data.columns:
            raise SchemaError("target column not found", operation="create", value=target)

        if data.shape[1] < 2:
            raise SchemaError("data has no feature columns besides the target", operation="create")

        if data[target].isnull().any():
            raise SchemaError("target column contains missing values", operation="create", value=target)

    def _validate_column_types(self, data: pd.DataFrame, column_types: Dict[str, ColumnType]) -> None:
        for column, column_type in column_types.items():
            if column not in data.columns:
                raise SchemaError("column type given for unknown column", operation="create", value=column)
            if not isinstance(column_type, ColumnType):
                raise SchemaError(f"invalid column type for '{column}'", operation="create", value=column_type)
            if column_type == ColumnType.NUMERIC and not pd.api.types.is_numeric_dtype(data[column]):
                raise SchemaError(f"column '{column}' declared numeric but is not", operation="create",
                                  value=str(data[column].dtype))

    def _check_values(self, data: pd.DataFrame) -> None:
        """Log warnings for missing and infinite values."""
        missing_count = int(data.isnull().sum().sum())
        if missing_count > 0:
            self.logger.warning(f"Found {missing_count} missing values in the data")

        numeric = data.select_dtypes(include=[np.number])
        inf_count = int(np.isinf(numeric.to_numpy(dtype=float)).sum()) if numeric.shape[1] else 0
        if inf_count > 0:
            self.logger.warning(f"Found {inf_count} infinite values in the data")

        self.logger.debug(f"Data shape: {data.shape[0]} rows x {data.shape[1]} columns")
