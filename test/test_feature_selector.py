import numpy as np
import pandas as pd
import pytest

from evalHarness.core import ConfigError, FeatureSelector, Task


def test_select_top_12_descending(regression_task, evaluator):
    selected = evaluator.select_features(regression_task, "f_test", top_n=12)
    scores = evaluator.feature_scores(regression_task, "f_test")

    assert len(selected) == 12
    assert len(set(selected)) == 12
    assert set(selected) <= set(regression_task.feature_names)
    ordered = [scores[name] for name in selected]
    assert ordered == sorted(ordered, reverse=True)
    assert selected[0] == "area"


@pytest.mark.parametrize("method", ["f_test", "mutual_info", "correlation"])
def test_regression_methods_rank_area_high(regression_task, method):
    selected = FeatureSelector(method).select(regression_task, 3)
    assert "area" in selected


@pytest.mark.parametrize("method", ["f_test", "mutual_info"])
def test_classification_methods(classification_task, method):
    scores = FeatureSelector(method).score(classification_task)
    assert list(scores.index) == classification_task.feature_names
    assert "area" in FeatureSelector(method).select(classification_task, 3)


def test_correlation_needs_regression(classification_task):
    with pytest.raises(ConfigError):
        FeatureSelector("correlation").score(classification_task)


def test_constant_feature_ranks_last():
    rng = np.random.default_rng(0)
    x = rng.normal(size=40)
    frame = pd.DataFrame({"constant": np.ones(40), "signal": x, "y": 3 * x + rng.normal(0, 0.1, 40)})
    task = Task.create(frame, "y")
    assert FeatureSelector("f_test").rank(task) == ["signal", "constant"]


def test_ties_keep_column_order():
    frame = pd.DataFrame({"b": [1.0, 2.0, 3.0, 4.0], "a": [1.0, 2.0, 3.0, 4.0], "y": [2.0, 4.0, 6.1, 8.0]})
    task = Task.create(frame, "y")
    assert FeatureSelector("correlation").rank(task) == ["b", "a"]


@pytest.mark.parametrize("top_n", [0, -1, 16, 2.5, True])
def test_invalid_top_n(regression_task, top_n):
    with pytest.raises(ConfigError):
        FeatureSelector("f_test").select(regression_task, top_n)


def test_unknown_method():
    with pytest.raises(ConfigError):
        FeatureSelector("chi2")
