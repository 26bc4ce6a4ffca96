"""
Helper utilities for evalHarness.

Persistence of fitted artifacts and small formatting helpers.
"""

from typing import Any, Union
from pathlib import Path
import joblib

from .logger import get_logger

logger = get_logger("helpers")


def save_object(obj: Any, path: Union[str, Path], compress: int = 3) -> Path:
    """Persist ``obj`` with joblib, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(obj, path, compress=compress)
    logger.info(f"Saved {type(obj).__name__} to {path}")
    return path


def load_object(path: Union[str, Path]) -> Any:
    """Load an object written by ``save_object``."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return joblib.load(path)


def format_time(seconds: float) -> str:
    """``42.10s``, ``3.50m`` or ``1.25h``."""
    if seconds < 60:
        return f"{seconds:.2f}s"
    if seconds < 3600:
        return f"{seconds / 60:.2f}m"
    return f"{seconds / 3600:.2f}h"
