"""
Evaluator for evalHarness.

Cross-validates learner configurations, aggregates fold scores, compares
configurations, and hosts the tuning and feature-filtering entry points.
Folds are independent, so they are fanned out with joblib; results are
gathered in split order once every fold has finished.
"""

from dataclasses import asdict
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from .base import Budget, ConfigSpace, ModelConfig, ScoreRecord, Split, TaskType, TuningResult
from .exceptions import ConfigError, FitError, MetricError
from .feature_selector import FeatureSelector
from .hyperparameter_tuner import HyperparameterTuner
from .model_runner import ModelRunner
from .task import Task
from ..evaluation.metrics import Metric, MetricsCalculator
from ..utils.logger import get_logger


def _evaluate_fold(
    runner: ModelRunner,
    calculator: MetricsCalculator,
    task: Task,
    split: Split,
    config: ModelConfig,
    metric: Metric
) -> float:
    train_idx, test_idx = split
    model = runner.fit(task, train_idx, config)
    predictions = runner.predict(model, task, test_idx)
    return calculator.score(predictions, task.target_values(test_idx), metric, task.task_type)


class Evaluator:
    """Scores, compares, tunes and filters learner configurations on a task."""

    def __init__(
        self,
        runner: Optional[ModelRunner] = None,
        calculator: Optional[MetricsCalculator] = None,
        n_jobs: int = 1
    ):
        if n_jobs == 0:
            raise ConfigError("n_jobs must not be 0", operation="Evaluator", value=n_jobs)
        self.runner = runner if runner is not None else ModelRunner()
        self.calculator = calculator if calculator is not None else MetricsCalculator()
        self.n_jobs = n_jobs
        self.logger = get_logger("Evaluator")

    # ------------------------------------------------------------------
    # scoring
    # ------------------------------------------------------------------

    def score(
        self,
        predictions: Sequence[Any],
        actuals: Sequence[Any],
        metric: Any,
        task_type: Optional[TaskType] = None
    ) -> float:
        """Score predictions against actual values with ``metric``."""
        return self.calculator.score(predictions, actuals, metric, task_type)

    def check_metric(self, task: Task, metric: Any) -> Metric:
        """Resolve ``metric`` and make sure it can score ``task``."""
        metric = self.calculator.resolve(metric)
        if metric.task_type != task.task_type:
            raise MetricError(f"'{metric.name}' is a {metric.task_type.value} metric, "
                              f"the task is {task.task_type.value}", operation="score", value=metric.name)
        return metric

    def _check_config(self, task: Task, config: ModelConfig) -> None:
        registry = self.runner.registry
        if config.name not in registry:
            raise FitError(f"unknown learner; available: {', '.join(registry.names())}",
                           operation="fit", value=config.name)
        registry.validate(config, task.task_type)

    def _run_folds(self, jobs: List[Tuple[Task, Split, ModelConfig]], metric: Metric) -> List[float]:
        # a parallel worker gets its own snapshot of the task
        snapshot = (lambda t: t) if self.n_jobs == 1 else (lambda t: t.clone())
        return Parallel(n_jobs=self.n_jobs)(
            delayed(_evaluate_fold)(self.runner, self.calculator, snapshot(task), split, config, metric)
            for task, split, config in jobs
        )

    def cross_validate(
        self,
        task: Task,
        splits: Sequence[Split],
        config: ModelConfig,
        metric: Any
    ) -> List[float]:
        """
        Fit, predict and score ``config`` on every split.

        Returns:
            One score per split, in split order

        Raises:
            ConfigError: If no splits are given or the configuration is invalid
            FitError: If the learner is unknown or any fold fails to fit
            MetricError: If the metric does not fit the task
        """
        if not splits:
            raise ConfigError("no splits given", operation="cross_validate")
        metric = self.check_metric(task, metric)
        self._check_config(task, config)

        scores = [float(s) for s in self._run_folds([(task, split, config) for split in splits], metric)]
        mean, std = self.aggregate(scores)
        self.logger.info(f"CV | learner={config.label} | folds={len(scores)} | {metric.name}={mean:.6g} +/- {std:.6g}")
        return scores

    def aggregate(self, scores: Sequence[float]) -> Tuple[float, float]:
        """Mean and population standard deviation of fold scores."""
        values = np.asarray(scores, dtype=float)
        if values.size == 0:
            raise MetricError("no scores to aggregate", operation="aggregate")
        return float(values.mean()), float(values.std())

    # ------------------------------------------------------------------
    # comparison
    # ------------------------------------------------------------------

    def benchmark(
        self,
        task: Task,
        splits: Sequence[Split],
        configs: Sequence[ModelConfig],
        metric: Any
    ) -> pd.DataFrame:
        """
        Cross-validate several configurations on the same splits.

        Returns:
            One score record per (configuration, fold), configurations in the
            given order and folds in split order
        """
        if not splits:
            raise ConfigError("no splits given", operation="benchmark")
        if not configs:
            raise ConfigError("no configurations given", operation="benchmark")
        metric = self.check_metric(task, metric)
        for config in configs:
            self._check_config(task, config)

        pairs = [(config, fold, split) for config in configs for fold, split in enumerate(splits)]
        scores = self._run_folds([(task, split, config) for config, _, split in pairs], metric)

        records = []
        for (config, fold, _), fold_score in zip(pairs, scores):
            record = ScoreRecord(fold, config.name, dict(config.hyperparameters), metric.name, float(fold_score))
            records.append({**asdict(record), "config": config.label})
        frame = pd.DataFrame(records, columns=["config", "fold", "learner", "hyperparameters", "metric", "score"])
        self.logger.info(f"Benchmark | configs={len(configs)} | folds={len(splits)} | metric={metric.name}")
        return frame

    def summarize(self, records: pd.DataFrame) -> pd.DataFrame:
        """Per-configuration mean and standard deviation of benchmark records."""
        summary = records.groupby("config", sort=False)["score"].agg(
            mean="mean",
            std=lambda s: float(np.std(s.to_numpy())),
            folds="count",
        )
        return summary.reset_index()

    # ------------------------------------------------------------------
    # tuning and feature filtering
    # ------------------------------------------------------------------

    def tune(
        self,
        task: Task,
        splits: Sequence[Split],
        config_space: ConfigSpace,
        metric: Any,
        budget: Budget,
        strategy: str = "random",
        seed: Optional[int] = None,
        **strategy_options
    ) -> TuningResult:
        """Search ``config_space`` within ``budget``; see ``HyperparameterTuner.tune``."""
        tuner = HyperparameterTuner(self, method=strategy, **strategy_options)
        return tuner.tune(task, splits, config_space, metric, budget, seed=seed)

    def feature_scores(self, task: Task, scoring_method: str = "f_test") -> pd.Series:
        return FeatureSelector(scoring_method).score(task)

    def select_features(self, task: Task, scoring_method: str = "f_test", top_n: int = 10) -> List[str]:
        """The ``top_n`` feature names ranked by descending univariate score."""
        return FeatureSelector(scoring_method).select(task, top_n)

    def filter_features(self, task: Task, scoring_method: str = "f_test", top_n: int = 10) -> Task:
        """``task`` restricted to its ``top_n`` best features."""
        return task.select(self.select_features(task, scoring_method, top_n))

