"""
Results reporting utilities for evalHarness.

Turns score reports into short text summaries and JSON files.
"""

from typing import Any, Dict, Union
from pathlib import Path
from datetime import datetime
import json

import numpy as np
import pandas as pd

from ..utils.logger import get_logger


def _to_serializable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _to_serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_serializable(v) for v in value]
    if isinstance(value, pd.DataFrame):
        return [_to_serializable(r) for r in value.to_dict(orient="records")]
    if isinstance(value, pd.Series):
        return _to_serializable(value.to_dict())
    if isinstance(value, np.ndarray):
        return _to_serializable(value.tolist())
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    return value


class ResultsReporter:
    """Reporter for evalHarness results."""

    def __init__(self):
        self.logger = get_logger("ResultsReporter")

    def format_score(self, label: str, metric: str, value: float, std: float = None) -> str:
        """One-line summary such as ``RMSE of decision_tree: 1.2345``."""
        line = f"{metric.upper()} of {label}: {value:.4f}"
        if std is not None:
            line += f" (+/- {std:.4f})"
        return line

    def format_summary(self, results: Dict[str, Any]) -> str:
        """Render a results dictionary produced by the pipelines as text."""
        lines = [f"Task: {results.get('task', '')}"]
        metric = results.get("metric", "score")

        for row in results.get("summary", []):
            lines.append(self.format_score(row["config"], metric, row["mean"], row["std"]))

        if "best_config" in results:
            lines.append(f"Best configuration: {results['best_config']}")
            lines.append(self.format_score("best configuration", metric, results["best_score"]))
            lines.append(f"Evaluations: {results.get('n_evaluations')}")

        if "selected_features" in results:
            lines.append(f"Selected features ({len(results['selected_features'])}): "
                         f"{', '.join(results['selected_features'])}")
        return "\n".join(lines)

    def save_json(self, results: Dict[str, Any], output_path: Union[str, Path]) -> Path:
        """Write results as JSON, stamped with the generation time."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        payload = {"generated_at": datetime.now().strftime("%Y-%m-%d %H:%M:%S"), **_to_serializable(results)}
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, default=str)

        self.logger.info(f"Results saved: {output_path}")
        return output_path
