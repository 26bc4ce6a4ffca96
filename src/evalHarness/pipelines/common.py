"""
Shared steps of the evalHarness command pipelines.

Each pipeline resolves a ``Config`` from the command line and the optional
config file, loads the task, builds the splits and finally reports results.
"""

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_SEARCH_SPACES
from ..config.default_config import DEFAULT_METRICS
from ..core.base import ConfigSpace, ParamRange, Split
from ..core.exceptions import ConfigError
from ..core.splitter import SplitStrategy
from ..core.task import Task
from ..data.loader import DataLoader
from ..evaluation.reporter import ResultsReporter
from ..utils.config import Config, ConfigManager
from ..utils.logger import get_logger

# command-line option -> Config field
ARG_TO_FIELD = {
    "data_file": "data_file",
    "target": "target",
    "column_types": "column_types",
    "output": "output_dir",
    "learner": "learner",
    "params": "hyperparameters",
    "metric": "metric",
    "resampling": "resampling",
    "folds": "folds",
    "fraction": "fraction",
    "repeats": "repeats",
    "group_column": "group_column",
    "seed": "seed",
    "cpu": "n_jobs",
    "log_level": "log_level",
    "search_method": "search_method",
    "max_evaluations": "max_evaluations",
    "max_seconds": "max_seconds",
    "grid_resolution": "grid_resolution",
    "feature_method": "feature_method",
    "top_n": "top_n",
}


def resolve_config(args: argparse.Namespace) -> Config:
    """Config defaults, overridden by ``--config``, overridden by explicit options."""
    manager = ConfigManager()
    if getattr(args, 'config', None):
        manager.load_from_file(args.config)

    overrides = {field: getattr(args, arg) for arg, field in ARG_TO_FIELD.items() if hasattr(args, arg)}
    manager.update_config(**overrides)
    config = manager.get_config()

    if not config.data_file:
        raise ValueError("No data file given (--data_file or data_file in the config file)")
    if not config.target:
        raise ValueError("No target column given (--target or target in the config file)")
    return config


def load_task(config: Config) -> Task:
    return DataLoader().load_csv(
        config.data_file,
        config.target,
        column_types=config.column_types,
        ordinal_levels=config.ordinal_levels,
    )


def build_splits(config: Config, task: Task) -> List[Split]:
    strategy = SplitStrategy.from_config(
        config.resampling,
        folds=config.folds,
        fraction=config.fraction,
        repeats=config.repeats,
        group_column=config.group_column,
        seed=config.seed,
    )
    splits = strategy.split(task)
    get_logger("Pipeline").info(f"Resampling | strategy={config.resampling} | splits={len(splits)} | seed={config.seed}")
    return splits


def resolve_metric(config: Config, task: Task) -> str:
    return config.metric or DEFAULT_METRICS[task.task_type.value]


def build_search_space(config: Config) -> ConfigSpace:
    """
    Search space of the configured learner.

    Ranges come from ``search_space`` in the config file, or else from the
    learner's default space. Configured hyperparameters that are not searched
    stay fixed.
    """
    spec = config.search_space or DEFAULT_SEARCH_SPACES.get(config.learner)
    if not spec:
        raise ConfigError("no search space configured for this learner", operation="tune", value=config.learner)

    ranges = {name: ParamRange.from_dict(range_spec) for name, range_spec in spec.items()}
    fixed = {k: v for k, v in config.hyperparameters.items() if k not in ranges}
    return ConfigSpace(config.learner, ranges, fixed)


def report_results(results: Dict[str, Any], config: Config, save_results: bool = True) -> Optional[Path]:
    """Print the text summary and optionally write ``results.json``."""
    reporter = ResultsReporter()
    print(reporter.format_summary(results))

    if not save_results:
        return None
    return reporter.save_json(results, Path(config.output_dir) / "results.json")
