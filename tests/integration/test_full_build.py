"""Integration test — a multi-node build delivered over an EventBus.

Producer threads play the role of engine worker nodes while the real
refresh loop redraws the dashboard.
"""

from __future__ import annotations

import io
import re
import threading

from rich.console import Console

from nodeboard.config import DashboardConfig
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

NODES = 4
PROJECTS_PER_NODE = 5
TARGETS = ["Restore", "CoreCompile", "Pack"]


def _ctx(context_id: int, instance_id: int, node_id: int) -> BuildEventContext:
    return BuildEventContext(
        project_context_id=context_id, project_instance_id=instance_id, node_id=node_id
    )


def _node_worker(bus: EventBus, node_id: int) -> None:
    for n in range(PROJECTS_PER_NODE):
        base = node_id * 1000 + n * 10
        path = f"src/N{node_id}P{n}/N{node_id}P{n}.csproj"

        query = _ctx(base + 1, base + 1, node_id)
        bus.publish(
            ProjectStartedEvent(context=query, project_file=path, target_names="GetNativeManifest")
        )
        bus.publish(ProjectFinishedEvent(context=query, project_file=path))

        owner = _ctx(base + 2, base + 2, node_id)
        bus.publish(ProjectStartedEvent(context=owner, project_file=path))
        for target in TARGETS:
            bus.publish(TargetStartedEvent(context=owner, project_file=path, target_name=target))
            bus.publish(TargetFinishedEvent(context=owner, project_file=path, target_name=target))
        bus.publish(ProjectFinishedEvent(context=owner, project_file=path))

        reentry = _ctx(base + 3, base + 2, node_id)
        bus.publish(ProjectStartedEvent(context=reentry, project_file=path, target_names="Build"))
        bus.publish(ProjectFinishedEvent(context=reentry, project_file=path))


def test_full_build_prints_each_notable_project_once():
    output = io.StringIO()
    bus = EventBus()
    node_logger = NodeLogger(
        Console(file=output, width=120),
        config=DashboardConfig(refresh_hz=200, _env_file=None),
    )
    node_logger.initialize(bus, node_count=NODES)
    bus.publish(BuildStartedEvent())

    workers = [
        threading.Thread(target=_node_worker, args=(bus, node_id))
        for node_id in range(1, NODES + 1)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    bus.publish(BuildFinishedEvent())
    assert node_logger.tracker.occupied_nodes() == []
    node_logger.shutdown()

    # Drop cursor movement so completion lines read cleanly.
    text = re.sub(r"\x1b\[\d+F\x1b\[0J", "", output.getvalue())
    completed = re.findall(r"(\S+) \x1b\[1mcompleted\x1b\[22m \(\d+\.\d+s\)\n", text)
    assert len(completed) == NODES * PROJECTS_PER_NODE
    assert len(set(completed)) == NODES * PROJECTS_PER_NODE
