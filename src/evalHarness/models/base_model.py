"""
Base model implementation for evalHarness.

Learners wrap a scikit-learn compatible estimator in a ``Pipeline`` whose
first step turns the task's semantic column types into a numeric design
matrix.
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional
import pandas as pd
import numpy as np
from sklearn.compose import ColumnTransformer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import LabelEncoder, OneHotEncoder, OrdinalEncoder, StandardScaler

from ..core.base import BaseLearner, ColumnType, TaskType


def _ordinal_levels(series: pd.Series) -> List[Any]:
    if isinstance(series.dtype, pd.CategoricalDtype):
        return list(series.dtype.categories)
    return sorted(series.dropna().unique().tolist())


class BaseModel(BaseLearner):
    """Base class for learners backed by a scikit-learn estimator."""

    # standardize numeric columns before the estimator (distance/margin based learners)
    scale_numeric: bool = False

    def __init__(self, task_type: TaskType, **params):
        super().__init__(task_type, **params)
        self.pipeline_ = None
        self.label_encoder_ = None
        self.feature_names_ = None

    @abstractmethod
    def _build_estimator(self) -> Any:
        """Create the unfitted estimator for ``self.task_type`` and ``self.params``."""
        pass

    def _build_preprocessor(self, X: pd.DataFrame, feature_types: Dict[str, ColumnType]) -> ColumnTransformer:
        numeric = [c for c in X.columns if feature_types[c] == ColumnType.NUMERIC]
        categorical = [c for c in X.columns if feature_types[c] == ColumnType.CATEGORICAL]
        ordinal = [c for c in X.columns if feature_types[c] == ColumnType.ORDINAL]

        transformers = []
        if numeric:
            transformers.append(("numeric", StandardScaler() if self.scale_numeric else "passthrough", numeric))
        if categorical:
            transformers.append((
                "categorical",
                OneHotEncoder(handle_unknown="ignore", sparse_output=False),
                categorical,
            ))
        if ordinal:
            transformers.append((
                "ordinal",
                OrdinalEncoder(
                    categories=[_ordinal_levels(X[c]) for c in ordinal],
                    handle_unknown="use_encoded_value",
                    unknown_value=-1,
                ),
                ordinal,
            ))
        return ColumnTransformer(transformers, remainder="drop")

    def fit(self, X: pd.DataFrame, y: np.ndarray, feature_types: Dict[str, ColumnType]) -> 'BaseModel':
        """Fit the preprocessing pipeline and estimator to the training data."""
        self.feature_names_ = list(X.columns)

        if self.task_type == TaskType.CLASSIFICATION:
            self.label_encoder_ = LabelEncoder()
            y = self.label_encoder_.fit_transform(y)

        self.pipeline_ = Pipeline([
            ("preprocess", self._build_preprocessor(X, feature_types)),
            ("estimator", self._build_estimator()),
        ])
        self.pipeline_.fit(X, y)
        self.is_fitted = True
        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Make predictions on new data."""
        if not self.is_fitted:
            raise ValueError("Model must be fitted before making predictions")
        predictions = self.pipeline_.predict(X)
        if self.label_encoder_ is not None:
            predictions = self.label_encoder_.inverse_transform(np.asarray(predictions).astype(int).ravel())
        return np.asarray(predictions)

    def get_feature_importance(self) -> Optional[np.ndarray]:
        """Importances over the encoded design matrix, if the estimator exposes them."""
        if not self.is_fitted:
            return None
        estimator = self.pipeline_.named_steps["estimator"]
        if hasattr(estimator, "feature_importances_"):
            return np.asarray(estimator.feature_importances_)
        if hasattr(estimator, "coef_"):
            return np.abs(np.atleast_2d(estimator.coef_)).mean(axis=0)
        return None

    def get_encoded_feature_names(self) -> List[str]:
        if not self.is_fitted:
            raise ValueError("Model must be fitted before getting feature names")
        return list(self.pipeline_.named_steps["preprocess"].get_feature_names_out())
