"""
Select pipeline for evalHarness.

Ranks features by a univariate score, keeps the best ``top_n`` and can
compare the learner's cross-validated score before and after filtering.
"""

import argparse
from typing import Any, Dict

from .common import build_splits, load_task, report_results, resolve_config, resolve_metric
from ..core.base import ModelConfig
from ..core.evaluator import Evaluator
from ..utils.logger import get_logger


def handle_select(args: argparse.Namespace) -> Dict[str, Any]:
    """Handle the select command."""
    logger = get_logger("SelectPipeline")
    config = resolve_config(args)

    task = load_task(config)
    evaluator = Evaluator(n_jobs=config.n_jobs)

    scores = evaluator.feature_scores(task, config.feature_method)
    selected = evaluator.select_features(task, config.feature_method, config.top_n)

    results = {
        "command": "select",
        "task": repr(task),
        "feature_method": config.feature_method,
        "top_n": config.top_n,
        "selected_features": selected,
        "feature_scores": {name: float(scores[name]) for name in selected},
    }

    if getattr(args, 'compare', False):
        metric = resolve_metric(config, task)
        learner = ModelConfig(config.learner, dict(config.hyperparameters))
        filtered = task.select(selected)
        summary = []
        for label, candidate in (("all features", task), (f"top {config.top_n} features", filtered)):
            splits = build_splits(config, candidate)
            mean, std = evaluator.aggregate(evaluator.cross_validate(candidate, splits, learner, metric))
            summary.append({"config": f"{learner.label} on {label}", "mean": mean, "std": std, "folds": len(splits)})
        results["metric"] = metric
        results["summary"] = summary
        logger.info(f"Select | {metric} all={summary[0]['mean']:.6g} | top_n={summary[1]['mean']:.6g}")

    report_results(results, config, getattr(args, 'save_results', True))
    return results
