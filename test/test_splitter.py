import numpy as np
import pytest

from evalHarness.core import ConfigError, SplitStrategy, k_fold, train_test_split
from evalHarness.core.base import CVStrategy
from evalHarness.core.splitter import holdout_sizes, leave_one_group_out, repeated_k_fold, stratified_k_fold


def _assert_partition(splits, n_rows):
    tests = [set(test.tolist()) for _, test in splits]
    for i, a in enumerate(tests):
        for b in tests[i + 1:]:
            assert not a & b
    assert set().union(*tests) == set(range(n_rows))
    for train, test in splits:
        assert not set(train.tolist()) & set(test.tolist())
        assert len(train) + len(test) == n_rows


def test_k_fold_is_exhaustive_and_disjoint(regression_task):
    splits = k_fold(regression_task, 5, seed=42)
    assert len(splits) == 5
    _assert_partition(splits, regression_task.n_rows)
    assert all(len(test) == 30 for _, test in splits)


def test_k_fold_is_reproducible(regression_task):
    first = k_fold(regression_task, 5, seed=7)
    second = k_fold(regression_task, 5, seed=7)
    for (train_a, test_a), (train_b, test_b) in zip(first, second):
        np.testing.assert_array_equal(train_a, train_b)
        np.testing.assert_array_equal(test_a, test_b)


def test_k_fold_seed_changes_partition(regression_task):
    first = k_fold(regression_task, 5, seed=1)
    second = k_fold(regression_task, 5, seed=2)
    assert any(not np.array_equal(a[1], b[1]) for a, b in zip(first, second))


def test_k_fold_rejects_bad_k(regression_task):
    with pytest.raises(ConfigError):
        k_fold(regression_task, 1)
    with pytest.raises(ConfigError):
        k_fold(regression_task, 151)


def test_holdout_sizes():
    assert holdout_sizes(150, 0.7) == (105, 45)
    assert holdout_sizes(150, 0.8) == (120, 30)
    assert holdout_sizes(10, 0.55) == (5, 5)


def test_train_test_split_sizes(regression_task):
    train, test = train_test_split(regression_task, 0.7, seed=42)
    assert len(train) == 105
    assert len(test) == 45
    assert set(train.tolist()) | set(test.tolist()) == set(range(150))
    assert not set(train.tolist()) & set(test.tolist())


def test_train_test_split_is_reproducible(regression_task):
    a = train_test_split(regression_task, 0.7, seed=42)
    b = train_test_split(regression_task, 0.7, seed=42)
    np.testing.assert_array_equal(a[0], b[0])
    np.testing.assert_array_equal(a[1], b[1])


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.2, 1.5, 0.001])
def test_train_test_split_rejects_bad_fraction(regression_task, fraction):
    with pytest.raises(ConfigError):
        train_test_split(regression_task, fraction, seed=42)


def test_stratified_k_fold_keeps_class_balance(classification_task):
    splits = stratified_k_fold(classification_task, 5, seed=42)
    _assert_partition(splits, classification_task.n_rows)
    y = classification_task.target_values()
    overall = np.mean(y == "yes")
    for _, test in splits:
        assert abs(np.mean(y[test] == "yes") - overall) < 0.1


def test_stratified_k_fold_needs_classification(regression_task):
    with pytest.raises(ConfigError):
        stratified_k_fold(regression_task, 5, seed=42)


def test_repeated_k_fold(regression_task):
    splits = repeated_k_fold(regression_task, 3, repeats=2, seed=42)
    assert len(splits) == 6
    _assert_partition(splits[:3], regression_task.n_rows)
    _assert_partition(splits[3:], regression_task.n_rows)


def test_leave_one_group_out(regression_task):
    splits = leave_one_group_out(regression_task, "neighborhood")
    assert len(splits) == 4
    neighborhoods = regression_task.data["neighborhood"].astype(str).to_numpy()
    for _, test in splits:
        assert len(set(neighborhoods[test])) == 1


def test_split_strategy_from_config(regression_task):
    holdout = SplitStrategy.from_config("holdout", fraction=0.7, seed=42)
    assert holdout.strategy == CVStrategy.HOLDOUT
    (train, test), = holdout.split(regression_task)
    assert (len(train), len(test)) == (105, 45)

    cv = SplitStrategy.from_config("cv", folds=3, seed=42)
    assert len(cv.split(regression_task)) == 3

    with pytest.raises(ConfigError):
        SplitStrategy.from_config("bootstrap")


def test_logo_strategy_needs_group_column(regression_task):
    with pytest.raises(ConfigError):
        SplitStrategy.from_config("logo").split(regression_task)
