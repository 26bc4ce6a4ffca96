"""
Command pipelines for evalHarness.

Each module exposes the ``handle_<command>`` function the CLI dispatches to.
"""
