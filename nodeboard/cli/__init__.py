"""nodeboard CLI — Typer-based command-line interface.

Provides the ``nodeboard`` command with subcommands for running a simulated
multi-node build and replaying a recorded event stream through the live
node dashboard.
"""
