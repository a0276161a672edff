"""``nodeboard replay EVENTS`` — replay a JSON-lines event stream under the dashboard.

Each non-blank line is one event object with a ``kind`` field (see
``nodeboard.models.events``).  The whole file is validated before the
dashboard starts; events are then published in file order with a fixed
delay between them.
"""

from __future__ import annotations

import time
from pathlib import Path

import typer
from rich.console import Console

from nodeboard.core.event_bus import EventBus, EventValidationError
from nodeboard.core.tracker import MissingContextError, UnsupportedEventError
from nodeboard.models.events import BuildEvent
from nodeboard.node_logger import NodeLogger

console = Console()


def load_events(path: Path, bus: EventBus) -> list[BuildEvent]:
    """Parse every event in *path*, raising ``EventValidationError`` with the line number."""
    events: list[BuildEvent] = []
    with path.open(encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                events.append(bus.receive(line))
            except EventValidationError as exc:
                raise EventValidationError(f"line {line_no}: {exc}") from exc
    return events


def infer_node_count(events: list[BuildEvent]) -> int:
    """Highest node id referenced by *events*, at least 1."""
    return max([1, *(event.context.node_id for event in events)])


def replay_cmd(
    events_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON-lines file with one build event per line.",
    ),
    nodes: int = typer.Option(
        None,
        "--nodes",
        "-n",
        min=1,
        help="Number of build nodes (default: highest node id in the stream).",
    ),
    interval: float = typer.Option(
        0.05,
        "--interval",
        "-i",
        min=0.0,
        help="Delay in seconds between published events.",
    ),
) -> None:
    """Replay a recorded event stream through the live node dashboard."""
    bus = EventBus()
    try:
        events = load_events(events_file, bus)
    except EventValidationError as exc:
        console.print(f"[bold red]Invalid event stream:[/bold red] {exc}")
        raise typer.Exit(code=1)

    node_count = nodes or infer_node_count(events)

    with NodeLogger(console) as node_logger:
        node_logger.initialize(bus, node_count=node_count)
        try:
            for event in events:
                bus.publish(event)
                if interval:
                    time.sleep(interval)
        except (UnsupportedEventError, MissingContextError) as exc:
            node_logger.shutdown()
            console.print(f"[bold red]Replay aborted:[/bold red] {exc}")
            raise typer.Exit(code=1)

    console.print(f"[dim]Replayed {len(events)} event(s) on {node_count} node(s).[/dim]")
