"""
Argument parser for evalHarness.

Three subcommands share the data, learner and resampling options:
``evaluate`` (cross-validate one or more learners), ``tune`` (budgeted
hyperparameter search) and ``select`` (univariate feature filtering).
Options left unset fall back to the ``--config`` file, then to ``Config``
defaults.
"""

import argparse
from typing import Any, Dict, List, Optional, Sequence

import yaml


def str2bool(v):
    """Convert a string to a boolean."""
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')


def comma_separated_items(value: str) -> List[str]:
    """Parse a comma-separated string into a list."""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def key_value_pairs(value: str) -> Dict[str, Any]:
    """
    Parse ``"a=1,b=gini,c=true"`` into a dict.

    Values are read as YAML scalars, so numbers, booleans and ``null`` get
    their natural types and anything else stays a string.
    """
    pairs = {}
    for item in comma_separated_items(value):
        if '=' not in item:
            raise argparse.ArgumentTypeError(f"Expected key=value, got '{item}'")
        key, raw = item.split('=', 1)
        pairs[key.strip()] = yaml.safe_load(raw.strip()) if raw.strip() else None
    return pairs


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the CLI parser with the evaluate, tune and select subcommands."""
    parser = argparse.ArgumentParser(
        prog="evalharness",
        description="evalHarness - resampled evaluation, tuning and feature filtering for tabular learners",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    def add_common_options(p):
        # Data
        p.add_argument('--data_file', type=str, default=None,
                       help="CSV file with one row per observation")
        p.add_argument('--target', type=str, default=None,
                       help="Name of the target column")
        p.add_argument('--column_types', type=key_value_pairs, default=None,
                       help="Column type overrides, e.g. 'zip=categorical,grade=ordinal'")
        p.add_argument('--output', type=str, default=None,
                       help="Results directory")
        p.add_argument('--save_results', type=str2bool, default=True,
                       help="Write results.json to the results directory")

        # Learner and scoring
        p.add_argument('--learner', type=str, default=None,
                       help="Learner name, e.g. decision_tree")
        p.add_argument('--params', type=key_value_pairs, default=None,
                       help="Learner hyperparameters, e.g. 'max_depth=4,min_samples_leaf=2'")
        p.add_argument('--metric', type=str, default=None,
                       help="Metric name (default: rmse for regression, ce for classification)")

        # Resampling
        p.add_argument('--resampling', type=str, default=None,
                       choices=['holdout', 'cv', 'stratified_cv', 'repeated_cv', 'logo'],
                       help="Resampling strategy")
        p.add_argument('--folds', type=int, default=None,
                       help="Number of folds")
        p.add_argument('--fraction', type=float, default=None,
                       help="Training fraction of the holdout split")
        p.add_argument('--repeats', type=int, default=None,
                       help="Repeats of repeated_cv")
        p.add_argument('--group_column', type=str, default=None,
                       help="Group column for logo resampling")
        p.add_argument('--seed', type=int, default=None,
                       help="Random seed")

        # System
        p.add_argument('--cpu', type=int, default=None,
                       help="Parallel fold jobs (-1 for all cores)")
        p.add_argument('--log_level', type=str, default=None,
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help="Logging level")
        p.add_argument('--log_file', type=str, default=None,
                       help="Also write the log to this file")
        p.add_argument('--config', type=str, default=None,
                       help="YAML or JSON configuration file (command-line options take precedence)")
        p.add_argument('--verbose', action='store_true',
                       help="Print the traceback when a command fails")

    # evaluate
    evaluate_p = subparsers.add_parser('evaluate', help='Cross-validate one or more learners on the same splits')
    add_common_options(evaluate_p)
    evaluate_p.add_argument('--learners', type=comma_separated_items, default=None,
                            help="Learners to compare (comma separated); overrides --learner")

    # tune
    tune_p = subparsers.add_parser('tune', help='Search hyperparameters within a budget')
    add_common_options(tune_p)
    tune_p.add_argument('--search_method', type=str, default=None,
                        choices=['random', 'grid', 'optuna'],
                        help="Search strategy")
    tune_p.add_argument('--max_evaluations', type=int, default=None,
                        help="Maximum number of configurations to evaluate")
    tune_p.add_argument('--max_seconds', type=float, default=None,
                        help="Time budget in seconds")
    tune_p.add_argument('--grid_resolution', type=int, default=None,
                        help="Points per numeric range of the grid search")

    # select
    select_p = subparsers.add_parser('select', help='Rank features and keep the best top_n')
    add_common_options(select_p)
    select_p.add_argument('--feature_method', type=str, default=None,
                          choices=['f_test', 'mutual_info', 'correlation'],
                          help="Univariate scoring method")
    select_p.add_argument('--top_n', type=int, default=None,
                          help="Number of features to keep")
    select_p.add_argument('--compare', type=str2bool, default=False,
                          help="Also cross-validate the learner on all features and on the selected ones")

    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_argument_parser()
    return parser.parse_args(argv)
