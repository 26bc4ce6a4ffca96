"""
Evaluate pipeline for evalHarness.

Cross-validates the configured learner, or several learners, on one shared
set of splits and reports mean and standard deviation per learner.
"""

import argparse
from typing import Any, Dict

from .common import build_splits, load_task, report_results, resolve_config, resolve_metric
from ..core.base import ModelConfig
from ..core.evaluator import Evaluator
from ..utils.logger import get_logger


def handle_evaluate(args: argparse.Namespace) -> Dict[str, Any]:
    """Handle the evaluate command."""
    logger = get_logger("EvaluatePipeline")
    config = resolve_config(args)

    task = load_task(config)
    splits = build_splits(config, task)
    metric = resolve_metric(config, task)

    learners = getattr(args, 'learners', None) or [config.learner]
    configs = [
        ModelConfig(name, dict(config.hyperparameters) if name == config.learner else {})
        for name in learners
    ]
    logger.info(f"Evaluate | learners={[c.label for c in configs]} | metric={metric}")

    evaluator = Evaluator(n_jobs=config.n_jobs)
    records = evaluator.benchmark(task, splits, configs, metric)
    summary = evaluator.summarize(records)

    results = {
        "command": "evaluate",
        "task": repr(task),
        "metric": metric,
        "resampling": config.resampling,
        "summary": summary.to_dict(orient="records"),
        "scores": records.to_dict(orient="records"),
    }
    report_results(results, config, getattr(args, 'save_results', True))
    return results
