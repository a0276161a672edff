"""DashboardState — the single owned aggregate of mutable dashboard state.

Everything the tracker writes and the renderer reads lives here, guarded
by one re-entrant lock.  Nothing outside this object holds dashboard
state; it is created when the logger initializes and dropped at shutdown.
"""

from __future__ import annotations

import threading

from nodeboard.core.timer import ProjectTimer
from nodeboard.models.dashboard import NodeSlot, NotabilityRecord
from nodeboard.models.identity import ProjectContext, ProjectInstance


class DashboardState:
    """Node table, per-project registries and render bookkeeping.

    Every read and write must happen while holding ``lock``.  The lock is
    re-entrant because notable completions redraw from inside a tracker
    handler that already holds it.

    Parameters
    ----------
    node_count:
        Size of the fixed node table.
    """

    def __init__(self, node_count: int) -> None:
        self.lock = threading.RLock()
        self.nodes: list[NodeSlot | None] = [None] * node_count
        self.used_node_count: int = 0
        self.notability: dict[ProjectContext, NotabilityRecord] = {}
        self.timers: dict[ProjectContext, ProjectTimer] = {}
        # First context seen for an instance owns it; never overwritten.
        self.owners: dict[ProjectInstance, ProjectContext] = {}

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def occupied_nodes(self) -> list[tuple[int, NodeSlot]]:
        """Return ``(index, slot)`` for every non-empty node, index-ascending."""
        with self.lock:
            return [(i, slot) for i, slot in enumerate(self.nodes) if slot is not None]
