"""
Hyperparameter tuning strategies for evalHarness.

The tuner drives a pluggable search strategy (random, grid, or Optuna TPE)
through an ask/tell loop, cross-validating every proposal until the budget is
spent.
"""

import itertools
import math
import time
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .base import BaseSearchStrategy, Budget, ConfigSpace, ParamRange, Split, TuningResult
from .exceptions import ConfigError
from .task import Task
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .evaluator import Evaluator


def _to_python(value: Any) -> Any:
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    return value


class RandomSearch(BaseSearchStrategy):
    """Independent uniform (or log-uniform) draws from every range."""

    def __init__(self, space: ConfigSpace, seed: Optional[int] = None, **kwargs):
        super().__init__(space, seed)
        self.rng = np.random.default_rng(seed)

    def _draw(self, param_range: ParamRange) -> Any:
        if param_range.kind == "categorical":
            return _to_python(param_range.choices[int(self.rng.integers(len(param_range.choices)))])
        if param_range.kind == "int" and not param_range.log:
            return int(self.rng.integers(math.ceil(param_range.low), math.floor(param_range.high) + 1))
        if param_range.log:
            value = math.exp(self.rng.uniform(math.log(param_range.low), math.log(param_range.high)))
        else:
            value = self.rng.uniform(param_range.low, param_range.high)
        return param_range.clip(value)

    def ask(self) -> Optional[Dict[str, Any]]:
        return {name: self._draw(r) for name, r in self.space.ranges.items()}


class GridSearch(BaseSearchStrategy):
    """Exhaustive search over an evenly spaced grid, ``resolution`` points per numeric range."""

    def __init__(self, space: ConfigSpace, seed: Optional[int] = None, resolution: int = 5, **kwargs):
        super().__init__(space, seed)
        if resolution < 1:
            raise ConfigError("grid resolution must be >= 1", operation="tune", value=resolution)
        self.resolution = resolution
        names = list(space.ranges)
        axes = [self._axis(space.ranges[name]) for name in names]
        self._grid = (dict(zip(names, point)) for point in itertools.product(*axes))

    def _axis(self, param_range: ParamRange) -> List[Any]:
        if param_range.kind == "categorical":
            return [_to_python(c) for c in param_range.choices]
        if param_range.log:
            points = np.geomspace(param_range.low, param_range.high, self.resolution)
        else:
            points = np.linspace(param_range.low, param_range.high, self.resolution)
        axis = []
        for point in points:
            value = param_range.clip(float(point))
            if value not in axis:
                axis.append(value)
        return axis

    def ask(self) -> Optional[Dict[str, Any]]:
        return next(self._grid, None)


class OptunaSearch(BaseSearchStrategy):
    """Optuna TPE sampler driven through the ask/tell interface."""

    def __init__(self, space: ConfigSpace, seed: Optional[int] = None, minimize: bool = True, **kwargs):
        super().__init__(space, seed)
        import optuna

        optuna.logging.set_verbosity(optuna.logging.WARNING)
        self._optuna = optuna
        self.study = optuna.create_study(
            direction="minimize" if minimize else "maximize",
            sampler=optuna.samplers.TPESampler(seed=seed),
        )
        self._pending = None

    def ask(self) -> Optional[Dict[str, Any]]:
        trial = self.study.ask()
        params = {}
        for name, r in self.space.ranges.items():
            if r.kind == "categorical":
                params[name] = trial.suggest_categorical(name, list(r.choices))
            elif r.kind == "int":
                params[name] = trial.suggest_int(name, math.ceil(r.low), math.floor(r.high), log=r.log)
            else:
                params[name] = trial.suggest_float(name, float(r.low), float(r.high), log=r.log)
        self._pending = trial
        return params

    def tell(self, params: Dict[str, Any], score: float) -> None:
        if self._pending is None:
            return
        if math.isfinite(score):
            self.study.tell(self._pending, score)
        else:
            self.study.tell(self._pending, state=self._optuna.trial.TrialState.FAIL)
        self._pending = None


SEARCH_STRATEGIES = {
    "random": RandomSearch,
    "grid": GridSearch,
    "optuna": OptunaSearch,
}


def create_search_strategy(method: str, space: ConfigSpace, seed: Optional[int] = None, **kwargs) -> BaseSearchStrategy:
    """Create a search strategy by name."""
    try:
        strategy_cls = SEARCH_STRATEGIES[method]
    except KeyError:
        raise ConfigError(f"unknown search method; expected one of {sorted(SEARCH_STRATEGIES)}",
                          operation="tune", value=method) from None
    return strategy_cls(space, seed=seed, **kwargs)


class HyperparameterTuner:
    """Budgeted search for the best configuration in a ``ConfigSpace``."""

    def __init__(self, evaluator: 'Evaluator', method: str = "random", **kwargs):
        # the search direction comes from the metric and the seed from tune()
        reserved = sorted(set(kwargs) & {"minimize", "seed"})
        if reserved:
            raise ConfigError(f"strategy options may not set {', '.join(reserved)}",
                              operation="tune", value={k: kwargs[k] for k in reserved})
        self.evaluator = evaluator
        self.method = method
        self.config = kwargs
        self.logger = get_logger("HyperparameterTuner")

    def _validate(self, task: Task, splits: Sequence[Split], space: ConfigSpace, budget: Budget) -> None:
        space.validate()
        budget.validate()
        if not splits:
            raise ConfigError("no splits given", operation="tune")
        registry = self.evaluator.runner.registry
        registry.validate_params(space.name, list(space.ranges) + list(space.fixed), task.task_type)

    def tune(
        self,
        task: Task,
        splits: Sequence[Split],
        space: ConfigSpace,
        metric: Any,
        budget: Budget,
        seed: Optional[int] = None
    ) -> TuningResult:
        """
        Search ``space`` and return the best configuration found within ``budget``.

        A later configuration replaces the incumbent only when it is strictly
        better beyond floating-point tolerance, so among equal scores the first
        evaluated wins. At least one configuration is always evaluated; the
        time budget is checked before each further evaluation.

        Raises:
            ConfigError: On a malformed space, budget, or learner configuration
            MetricError: If the metric does not fit the task
        """
        self._validate(task, splits, space, budget)
        metric = self.evaluator.check_metric(task, metric)
        search = create_search_strategy(self.method, space, seed=seed, minimize=metric.minimize, **self.config)

        self.logger.info(f"Tune | method={self.method} | learner={space.name} | metric={metric.name} | "
                         f"folds={len(splits)} | max_evaluations={budget.max_evaluations} | "
                         f"max_seconds={budget.max_seconds} | seed={seed}")

        history: List[Dict[str, Any]] = []
        best_config, best_score = None, None
        start = time.monotonic()

        while True:
            n_done = len(history)
            if budget.max_evaluations is not None and n_done >= budget.max_evaluations:
                break
            if budget.max_seconds is not None and n_done > 0 and time.monotonic() - start >= budget.max_seconds:
                self.logger.info(f"Tune | time budget exhausted after {n_done} evaluations")
                break
            params = search.ask()
            if params is None:
                break

            config = space.to_config(params)
            scores = self.evaluator.cross_validate(task, splits, config, metric)
            mean, std = self.evaluator.aggregate(scores)
            search.tell(params, mean)

            history.append({
                "evaluation": n_done + 1,
                **params,
                "score": mean,
                "std": std,
                "elapsed": time.monotonic() - start,
            })
            self.logger.debug(f"Tune | eval={n_done + 1} | params={params} | score={mean:.6g}")

            if self._improves(metric, mean, best_score):
                best_config, best_score = config, mean

        self.logger.info(f"Tune | best_score={best_score} | best_params={best_config.hyperparameters}")
        return TuningResult(
            best_config=best_config,
            best_score=best_score,
            archive=pd.DataFrame(history),
            n_evaluations=len(history),
        )

    @staticmethod
    def _improves(metric, candidate: float, incumbent: Optional[float]) -> bool:
        if incumbent is None:
            return True
        if math.isnan(incumbent):
            return not math.isnan(candidate)
        if math.isnan(candidate):
            return False
        if math.isclose(candidate, incumbent, rel_tol=1e-9, abs_tol=1e-12):
            return False
        return metric.better(candidate, incumbent)
