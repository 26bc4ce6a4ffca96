"""
Run configuration for evalHarness.

A ``Config`` holds everything one CLI run needs: where the data lives, which
learner to fit, how to resample, and the tuning and feature filtering
settings. ``ConfigManager`` layers a YAML or JSON file and explicit overrides
on top of the dataclass defaults.
"""

from typing import Any, Dict, List, Optional, Union
import yaml
import json
from pathlib import Path
from dataclasses import dataclass, asdict, fields

from .logger import get_logger

_YAML_SUFFIXES = ('.yaml', '.yml')
_JSON_SUFFIXES = ('.json',)


@dataclass
class Config:
    """Settings of one evaluate, tune or select run."""

    # Data
    data_file: Optional[str] = None
    target: Optional[str] = None
    column_types: Dict[str, str] = None
    ordinal_levels: Dict[str, List[Any]] = None

    # Learner and scoring; metric None picks the task type's default
    learner: str = "decision_tree"
    hyperparameters: Dict[str, Any] = None
    metric: Optional[str] = None

    # Resampling
    resampling: str = "cv"
    folds: int = 5
    fraction: float = 0.8
    repeats: int = 1
    group_column: Optional[str] = None
    seed: int = 42
    n_jobs: int = 1

    # Tuning
    search_method: str = "random"
    search_space: Dict[str, Dict[str, Any]] = None
    max_evaluations: Optional[int] = 20
    max_seconds: Optional[float] = None
    grid_resolution: int = 5

    # Feature filtering
    feature_method: str = "f_test"
    top_n: int = 10

    # Output
    output_dir: str = "./results"
    log_level: str = "INFO"

    def __post_init__(self):
        for name in ("column_types", "ordinal_levels", "hyperparameters", "search_space"):
            if getattr(self, name) is None:
                setattr(self, name, {})

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]


class ConfigManager:
    """Loads, overrides and saves a ``Config``."""

    def __init__(self):
        self.logger = get_logger("ConfigManager")
        self.config = Config()

    def load_from_file(self, config_path: Union[str, Path]) -> 'ConfigManager':
        """
        Apply the settings of a ``.yaml``/``.yml`` or ``.json`` file.

        Keys that are not ``Config`` fields are logged and skipped.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: On an unsupported suffix or a file that is not a mapping
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        if suffix not in _YAML_SUFFIXES + _JSON_SUFFIXES:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        self.logger.info(f"Loading configuration from {config_path}")
        with open(config_path, 'r', encoding='utf-8') as f:
            settings = yaml.safe_load(f) if suffix in _YAML_SUFFIXES else json.load(f)

        if settings is None:
            settings = {}
        if not isinstance(settings, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        self._apply(settings)
        return self

    def _apply(self, settings: Dict[str, Any]) -> None:
        known = set(Config.field_names())
        for key, value in settings.items():
            if key not in known:
                self.logger.warning(f"Unknown configuration key: {key}")
                continue
            setattr(self.config, key, value)
        self.logger.debug(f"Config | applied {sorted(k for k in settings if k in known)}")

    def save_to_file(self, config_path: Union[str, Path]) -> Path:
        """Write the current settings as YAML or JSON, chosen by suffix."""
        config_path = Path(config_path)
        suffix = config_path.suffix.lower()
        if suffix not in _YAML_SUFFIXES + _JSON_SUFFIXES:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        config_path.parent.mkdir(parents=True, exist_ok=True)
        settings = asdict(self.config)
        with open(config_path, 'w', encoding='utf-8') as f:
            if suffix in _YAML_SUFFIXES:
                yaml.safe_dump(settings, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(settings, f, indent=2)

        self.logger.info(f"Configuration saved to {config_path}")
        return config_path

    def get_config(self) -> Config:
        return self.config

    def update_config(self, **overrides) -> 'ConfigManager':
        """Apply explicit overrides; ``None`` means "not given" and is skipped."""
        self._apply({k: v for k, v in overrides.items() if v is not None})
        return self
