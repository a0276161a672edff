"""``nodeboard demo`` — run a simulated multi-node build under the dashboard.

One producer thread per node publishes project and target events to an
``EventBus`` with a ``NodeLogger`` attached, the same way a build engine
delivers them from its worker nodes.  Each project is preceded by an
introspection query and followed by a re-entered build of the same
instance, neither of which should print a completion line.
"""

from __future__ import annotations

import itertools
import random
import threading
import time

import typer
from rich.console import Console
from rich.panel import Panel

from nodeboard.core.event_bus import EventBus
from nodeboard.models.events import (
    BuildFinishedEvent,
    BuildStartedEvent,
    ProjectFinishedEvent,
    ProjectStartedEvent,
    TargetFinishedEvent,
    TargetStartedEvent,
)
from nodeboard.models.identity import BuildEventContext
from nodeboard.node_logger import NodeLogger

console = Console()

DEMO_TARGETS = [
    "Restore",
    "ResolveReferences",
    "CoreCompile",
    "CopyFilesToOutputDirectory",
]


class _IdAllocator:
    """Hands out unique context/instance ids across producer threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    def next(self) -> int:
        with self._lock:
            return next(self._ids)


def _build_project(
    bus: EventBus,
    ids: _IdAllocator,
    node_id: int,
    project_file: str,
    rng: random.Random,
    speed: float,
) -> None:
    instance_id = ids.next()

    # Introspection query: not notable, never printed.
    query = BuildEventContext(
        project_context_id=ids.next(), project_instance_id=ids.next(), node_id=node_id
    )
    bus.publish(
        ProjectStartedEvent(
            context=query, project_file=project_file, target_names="GetTargetFrameworks"
        )
    )
    bus.publish(ProjectFinishedEvent(context=query, project_file=project_file))

    owner = BuildEventContext(
        project_context_id=ids.next(), project_instance_id=instance_id, node_id=node_id
    )
    bus.publish(ProjectStartedEvent(context=owner, project_file=project_file))
    for target in DEMO_TARGETS:
        bus.publish(
            TargetStartedEvent(context=owner, project_file=project_file, target_name=target)
        )
        time.sleep(rng.uniform(0.05, 0.6) / speed)
        bus.publish(
            TargetFinishedEvent(context=owner, project_file=project_file, target_name=target)
        )
    bus.publish(ProjectFinishedEvent(context=owner, project_file=project_file))

    # Re-entered instance under a new context: notable, but not the owner.
    reentry = owner.model_copy(update={"project_context_id": ids.next()})
    bus.publish(
        ProjectStartedEvent(context=reentry, project_file=project_file, target_names="Build")
    )
    bus.publish(ProjectFinishedEvent(context=reentry, project_file=project_file))


def _run_node(
    bus: EventBus,
    ids: _IdAllocator,
    node_id: int,
    projects: list[str],
    seed: int,
    speed: float,
) -> None:
    rng = random.Random(seed)
    for project_file in projects:
        _build_project(bus, ids, node_id, project_file, rng, speed)


def demo_cmd(
    nodes: int = typer.Option(4, "--nodes", "-n", min=1, help="Number of build nodes."),
    projects: int = typer.Option(
        12, "--projects", "-p", min=1, help="Number of projects to build."
    ),
    seed: int = typer.Option(0, "--seed", help="Random seed for target durations."),
    speed: float = typer.Option(
        1.0, "--speed", "-s", min=0.01, help="Speed multiplier for simulated work."
    ),
) -> None:
    """Run a simulated multi-node build under the live node dashboard."""
    project_files = [
        f"src/Project{i:02d}/Project{i:02d}.csproj" for i in range(1, projects + 1)
    ]

    console.print(
        Panel(
            f"[bold]nodeboard demo[/bold]\n\n"
            f"Building {projects} project(s) on {nodes} node(s).",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    bus = EventBus()
    ids = _IdAllocator()
    started = time.perf_counter()

    with NodeLogger(console) as node_logger:
        node_logger.initialize(bus, node_count=nodes)
        bus.publish(BuildStartedEvent(message="Build started."))

        workers = [
            threading.Thread(
                target=_run_node,
                args=(
                    bus,
                    ids,
                    node_id,
                    project_files[node_id - 1 :: nodes],
                    seed + node_id,
                    speed,
                ),
                name=f"demo-node-{node_id}",
            )
            for node_id in range(1, nodes + 1)
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        bus.publish(BuildFinishedEvent(message="Build finished."))

    elapsed = time.perf_counter() - started
    console.print(f"[bold green]Build finished[/bold green] in {elapsed:.1f}s")
