import math

import numpy as np
import pandas as pd
import pytest

from evalHarness.core import (
    ConfigError,
    Evaluator,
    FitError,
    MetricError,
    ModelConfig,
    Task,
    k_fold,
    train_test_split,
)


def test_holdout_mse_is_reproducible(regression_task, evaluator):
    config = ModelConfig("decision_tree", {"random_state": 0})
    split = train_test_split(regression_task, 0.8, seed=42)

    first = evaluator.cross_validate(regression_task, [split], config, "mse")
    second = evaluator.cross_validate(regression_task, [train_test_split(regression_task, 0.8, seed=42)], config, "mse")

    assert len(first) == 1
    assert math.isfinite(first[0])
    assert first[0] >= 0
    assert first == second


def test_constant_target_featureless_mse_is_zero(evaluator):
    frame = pd.DataFrame({"x": np.linspace(0, 1, 30), "y": np.full(30, 7.0)})
    task = Task.create(frame, "y")
    scores = evaluator.cross_validate(task, k_fold(task, 3, seed=1), ModelConfig("featureless"), "mse")
    assert scores == [0.0, 0.0, 0.0]


def test_cross_validate_one_score_per_split(regression_task, evaluator):
    splits = k_fold(regression_task, 5, seed=42)
    scores = evaluator.cross_validate(regression_task, splits, ModelConfig("decision_tree", {"max_depth": 3}), "rmse")
    assert len(scores) == 5
    assert all(s > 0 for s in scores)


def test_informative_learner_beats_featureless(regression_task, evaluator):
    splits = k_fold(regression_task, 5, seed=42)
    tree = evaluator.aggregate(evaluator.cross_validate(regression_task, splits, ModelConfig("random_forest"), "rmse"))
    baseline = evaluator.aggregate(evaluator.cross_validate(regression_task, splits, ModelConfig("featureless"), "rmse"))
    assert tree[0] < baseline[0]


def test_cross_validate_errors(regression_task, classification_task, evaluator):
    splits = k_fold(regression_task, 3, seed=42)
    with pytest.raises(ConfigError):
        evaluator.cross_validate(regression_task, [], ModelConfig("decision_tree"), "mse")
    with pytest.raises(FitError):
        evaluator.cross_validate(regression_task, splits, ModelConfig("no_such_learner"), "mse")
    with pytest.raises(ConfigError):
        evaluator.cross_validate(regression_task, splits, ModelConfig("decision_tree", {"depth": 2}), "mse")
    with pytest.raises(MetricError):
        evaluator.cross_validate(regression_task, splits, ModelConfig("decision_tree"), "accuracy")
    with pytest.raises(MetricError):
        evaluator.cross_validate(classification_task, splits, ModelConfig("decision_tree"), "mse")


def test_parallel_matches_sequential(regression_task):
    splits = k_fold(regression_task, 4, seed=42)
    config = ModelConfig("decision_tree", {"random_state": 0, "max_depth": 4})
    sequential = Evaluator(n_jobs=1).cross_validate(regression_task, splits, config, "mae")
    parallel = Evaluator(n_jobs=2).cross_validate(regression_task, splits, config, "mae")
    assert sequential == pytest.approx(parallel)


def test_zero_jobs_rejected():
    with pytest.raises(ConfigError):
        Evaluator(n_jobs=0)


def test_aggregate(evaluator):
    mean, std = evaluator.aggregate([1.0, 2.0, 3.0, 4.0])
    assert mean == pytest.approx(2.5)
    assert std == pytest.approx(np.std([1.0, 2.0, 3.0, 4.0]))
    assert evaluator.aggregate([5.0]) == (5.0, 0.0)
    with pytest.raises(MetricError):
        evaluator.aggregate([])


def test_score(evaluator):
    assert evaluator.score([1.0, 2.0], [1.0, 4.0], "mse") == pytest.approx(2.0)


def test_benchmark_and_summarize(classification_task, evaluator):
    splits = k_fold(classification_task, 3, seed=42)
    configs = [ModelConfig("featureless"), ModelConfig("decision_tree", {"max_depth": 3})]
    records = evaluator.benchmark(classification_task, splits, configs, "ce")

    assert list(records.columns) == ["config", "fold", "learner", "hyperparameters", "metric", "score"]
    assert len(records) == 6
    assert records["fold"].tolist() == [0, 1, 2, 0, 1, 2]
    assert records["learner"].tolist()[:3] == ["featureless"] * 3

    summary = evaluator.summarize(records)
    assert summary["config"].tolist() == ["featureless", "decision_tree(max_depth=3)"]
    assert (summary["folds"] == 3).all()
    tree = summary.set_index("config").loc["decision_tree(max_depth=3)", "mean"]
    baseline = summary.set_index("config").loc["featureless", "mean"]
    assert tree < baseline


def test_benchmark_requires_configs(regression_task, evaluator):
    with pytest.raises(ConfigError):
        evaluator.benchmark(regression_task, k_fold(regression_task, 3, seed=1), [], "mse")


def test_task_unchanged_by_evaluation(regression_task, evaluator):
    before = regression_task.data
    evaluator.cross_validate(regression_task, k_fold(regression_task, 3, seed=1), ModelConfig("knn"), "mse")
    pd.testing.assert_frame_equal(regression_task.data, before)


def test_filter_features(regression_task, evaluator):
    filtered = evaluator.filter_features(regression_task, "f_test", top_n=3)
    assert len(filtered.feature_names) == 3
    assert "area" in filtered.feature_names
    assert filtered.target == "price"
