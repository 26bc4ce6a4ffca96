"""
Default hyperparameter search spaces for evalHarness learners.

Each entry maps a hyperparameter to a range in the form accepted by
``ParamRange.from_dict``: ``{"type": "int" | "float", "low", "high", "log"}``
or ``{"type": "categorical", "choices": [...]}``.
"""

DEFAULT_SEARCH_SPACES = {
    "featureless": {},

    "decision_tree": {
        "max_depth": {"type": "int", "low": 1, "high": 10},
        "min_samples_split": {"type": "int", "low": 2, "high": 20},
        "min_samples_leaf": {"type": "int", "low": 1, "high": 10},
    },

    "random_forest": {
        "n_estimators": {"type": "int", "low": 50, "high": 300},
        "max_depth": {"type": "int", "low": 2, "high": 12},
        "min_samples_leaf": {"type": "int", "low": 1, "high": 5},
        "max_features": {"type": "categorical", "choices": ["sqrt", "log2", 1.0]},
    },

    "linear_regression": {
        "fit_intercept": {"type": "categorical", "choices": [True, False]},
    },

    "lasso": {
        "alpha": {"type": "float", "low": 1e-4, "high": 10.0, "log": True},
    },

    "logistic_regression": {
        "C": {"type": "float", "low": 1e-3, "high": 100.0, "log": True},
    },

    "knn": {
        "n_neighbors": {"type": "int", "low": 1, "high": 30},
        "weights": {"type": "categorical", "choices": ["uniform", "distance"]},
        "p": {"type": "int", "low": 1, "high": 2},
    },

    "svm": {
        "C": {"type": "float", "low": 1e-2, "high": 100.0, "log": True},
        "kernel": {"type": "categorical", "choices": ["rbf", "linear"]},
    },

    "gaussian_nb": {
        "var_smoothing": {"type": "float", "low": 1e-12, "high": 1e-6, "log": True},
    },

    "xgboost": {
        "n_estimators": {"type": "int", "low": 50, "high": 300},
        "learning_rate": {"type": "float", "low": 0.01, "high": 0.3, "log": True},
        "max_depth": {"type": "int", "low": 2, "high": 8},
        "subsample": {"type": "float", "low": 0.5, "high": 1.0},
    },
}
