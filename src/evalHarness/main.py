#!/usr/bin/env python3
"""
evalHarness command-line entry point.

Commands:
- evaluate: cross-validate one or more learners on shared splits
- tune: budgeted hyperparameter search for one learner
- select: univariate feature ranking and filtering
"""

import sys
import traceback
from datetime import datetime
from typing import Optional, Sequence

from .cli.argument_parser import parse_arguments
from .utils.logger import setup_logging


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point, dispatching to the command handlers."""
    args = parse_arguments(argv)

    # Command handlers, imported on demand
    handlers = {
        'evaluate': lambda a: __import__('evalHarness.pipelines.evaluate', fromlist=['handle_evaluate']).handle_evaluate(a),
        'tune': lambda a: __import__('evalHarness.pipelines.tune', fromlist=['handle_tune']).handle_tune(a),
        'select': lambda a: __import__('evalHarness.pipelines.selection', fromlist=['handle_select']).handle_select(a),
    }

    cmd = getattr(args, 'command', None)
    handler = handlers.get(cmd)

    if handler is None:
        raise ValueError(f"Unknown command: {cmd}. Supported commands: {', '.join(handlers.keys())}")

    logger = setup_logging(args.log_level or "INFO", log_file=args.log_file)

    start_time = datetime.now()
    logger.info(f"Command: {cmd.upper()} | started {start_time.strftime('%Y-%m-%d %H:%M:%S')}")

    try:
        handler(args)
        logger.info(f"Command: {cmd.upper()} | finished in {datetime.now() - start_time}")
    except KeyboardInterrupt:
        sys.stderr.write(f"\n{cmd.upper()} interrupted by user\n")
        sys.exit(130)
    except FileNotFoundError as e:
        sys.stderr.write(f"\nFile not found: {e}\n")
        sys.exit(2)
    except ValueError as e:
        sys.stderr.write(f"\nInvalid argument: {e}\n")
        if args.verbose:
            traceback.print_exc()
        sys.exit(3)
    except Exception as e:
        sys.stderr.write(f"\n{cmd.upper()} failed: {e}\n")
        if args.verbose:
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
