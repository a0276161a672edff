"""Main Typer application — imports and registers all CLI commands.

Entry point: ``nodeboard`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from nodeboard import __version__
from nodeboard.cli.commands.demo import demo_cmd
from nodeboard.cli.commands.replay import replay_cmd
from nodeboard.config import config

app = typer.Typer(
    name="nodeboard",
    help="nodeboard: live in-place dashboard of build nodes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="demo", help="Run a simulated multi-node build under the dashboard.")(demo_cmd)
app.command(name="replay", help="Replay a JSON-lines event stream under the dashboard.")(replay_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level for diagnostics on stderr (default: NODEBOARD_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=(log_level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command(name="version", help="Show the nodeboard version.")
def version_cmd() -> None:
    Console().print(f"nodeboard [bold]{__version__}[/bold]")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
