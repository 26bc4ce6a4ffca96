"""
Tune pipeline for evalHarness.

Searches the configured learner's hyperparameter space within the evaluation
and time budget and reports the best configuration with the full archive.
"""

import argparse
from typing import Any, Dict

from .common import build_search_space, build_splits, load_task, report_results, resolve_config, resolve_metric
from ..core.base import Budget
from ..core.evaluator import Evaluator
from ..utils.helpers import format_time
from ..utils.logger import get_logger


def handle_tune(args: argparse.Namespace) -> Dict[str, Any]:
    """Handle the tune command."""
    logger = get_logger("TunePipeline")
    config = resolve_config(args)

    task = load_task(config)
    splits = build_splits(config, task)
    metric = resolve_metric(config, task)
    space = build_search_space(config)
    budget = Budget(config.max_evaluations, config.max_seconds)

    options = {"resolution": config.grid_resolution} if config.search_method == "grid" else {}

    evaluator = Evaluator(n_jobs=config.n_jobs)
    result = evaluator.tune(task, splits, space, metric, budget, strategy=config.search_method,
                            seed=config.seed, **options)

    elapsed = float(result.archive["elapsed"].iloc[-1]) if len(result.archive) else 0.0
    logger.info(f"Tune | finished {result.n_evaluations} evaluations in {format_time(elapsed)}")

    results = {
        "command": "tune",
        "task": repr(task),
        "metric": metric,
        "search_method": config.search_method,
        "best_config": result.best_config.label,
        "best_params": dict(result.best_config.hyperparameters),
        "best_score": result.best_score,
        "n_evaluations": result.n_evaluations,
        "archive": result.archive,
    }
    report_results(results, config, getattr(args, 'save_results', True))
    return results
