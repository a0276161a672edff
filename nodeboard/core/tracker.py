"""State tracker — applies build lifecycle events to the dashboard state.

Each handler runs under the shared ``DashboardState`` lock.  The tracker
knows nothing about the engine's event objects; the ``NodeLogger`` facade
translates callbacks into calls on this interface.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING

from nodeboard.core.identity import ContextIdentityResolver
from nodeboard.core.notability import is_notable
from nodeboard.core.state import DashboardState
from nodeboard.core.timer import Clock, ProjectTimer
from nodeboard.models.dashboard import NodeSlot, NotabilityRecord
from nodeboard.models.identity import BuildEventContext, ProjectContext

if TYPE_CHECKING:
    from nodeboard.monitor.renderer import ConsoleRenderer

logger = logging.getLogger(__name__)


class DiagnosticPolicy(str, Enum):
    """How warning/error events are treated by the dashboard."""

    FAIL = "fail"
    LOG = "log"


class UnsupportedEventError(NotImplementedError):
    """Raised when the dashboard receives an event it cannot represent."""


class MissingContextError(KeyError):
    """Raised when an event references a project context that never started."""

    def __init__(self, project_context: ProjectContext, event: str) -> None:
        super().__init__(project_context)
        self.project_context = project_context
        self.event = event

    def __str__(self) -> str:
        return (
            f"{self.event} references project context {self.project_context.id} "
            f"with no matching project start"
        )


class StateTracker:
    """Applies project and target lifecycle events to a ``DashboardState``.

    Parameters
    ----------
    state:
        The shared dashboard aggregate.
    renderer:
        Console renderer used for synchronous completion lines.
    resolver:
        Identity resolver sized to the state's node table.
    diagnostic_policy:
        ``FAIL`` raises ``UnsupportedEventError`` on warnings/errors;
        ``LOG`` logs them and continues.
    clock:
        Monotonic clock for project timers.
    """

    def __init__(
        self,
        state: DashboardState,
        renderer: ConsoleRenderer,
        resolver: ContextIdentityResolver,
        *,
        diagnostic_policy: DiagnosticPolicy = DiagnosticPolicy.FAIL,
        clock: Clock = time.perf_counter,
    ) -> None:
        if resolver.node_count != state.node_count:
            raise ValueError(
                f"resolver sized for {resolver.node_count} nodes, "
                f"state has {state.node_count}"
            )
        self._state = state
        self._renderer = renderer
        self._resolver = resolver
        self._diagnostic_policy = DiagnosticPolicy(diagnostic_policy)
        self._clock = clock

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def project_started(
        self, context: BuildEventContext, project_file: str, target_names: str
    ) -> None:
        """Record notability, start the project timer and claim instance ownership."""
        identity = self._resolver.resolve(context)
        notable = is_notable(target_names)

        with self._state.lock:
            self._state.notability[identity.project_context] = NotabilityRecord(
                is_notable=notable,
                path=project_file,
                requested_targets=target_names,
            )
            self._state.timers[identity.project_context] = ProjectTimer.start_new(
                self._clock
            )
            self._state.owners.setdefault(
                identity.project_instance, identity.project_context
            )

        logger.debug(
            "Project started: %s [%s] ctx=%d notable=%s",
            project_file,
            target_names,
            identity.project_context.id,
            notable,
        )

    def project_finished(self, context: BuildEventContext, project_file: str) -> None:
        """Print a completion line if this is the owning run of a notable project."""
        identity = self._resolver.resolve(context)

        with self._state.lock:
            record = self._state.notability.get(identity.project_context)
            if record is None:
                raise MissingContextError(identity.project_context, "project finish")
            if not record.is_notable:
                logger.debug("Project finished (not notable): %s", project_file)
                return

            owner = self._state.owners.get(identity.project_instance)
            if owner != identity.project_context:
                logger.debug(
                    "Project finished under non-owning ctx=%d (owner ctx=%s): %s",
                    identity.project_context.id,
                    owner.id if owner is not None else None,
                    project_file,
                )
                return

            timer = self._timer_for(identity.project_context, "project finish")
            self._renderer.print_completion(record.path, timer.elapsed_seconds)

    # ------------------------------------------------------------------
    # Targets
    # ------------------------------------------------------------------

    def target_started(
        self, context: BuildEventContext, project_file: str, target_name: str
    ) -> None:
        identity = self._resolver.resolve(context)
        if not self._resolver.in_range(identity.node_index):
            logger.warning(
                "Ignoring target start for out-of-range node id %d (%s %s)",
                context.node_id,
                project_file,
                target_name,
            )
            return

        with self._state.lock:
            timer = self._timer_for(identity.project_context, "target start")
            self._state.nodes[identity.node_index] = NodeSlot(
                project_path=project_file,
                target_name=target_name,
                timer=timer,
            )

    def target_finished(self, context: BuildEventContext) -> None:
        node_index = self._resolver.node_index(context)
        if not self._resolver.in_range(node_index):
            logger.warning(
                "Ignoring target finish for out-of-range node id %d", context.node_id
            )
            return

        with self._state.lock:
            self._state.nodes[node_index] = None

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def warning_raised(self, context: BuildEventContext, message: str) -> None:
        self._diagnostic("warning", context, message, logging.WARNING)

    def error_raised(self, context: BuildEventContext, message: str) -> None:
        self._diagnostic("error", context, message, logging.ERROR)

    def _diagnostic(
        self, kind: str, context: BuildEventContext, message: str, level: int
    ) -> None:
        if self._diagnostic_policy is DiagnosticPolicy.FAIL:
            raise UnsupportedEventError(
                f"unsupported event: build {kind} cannot be shown by the node "
                f"dashboard (node {context.node_id}): {message}"
            )
        logger.log(level, "Build %s (node %d): %s", kind, context.node_id, message)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def occupied_nodes(self) -> list[tuple[int, NodeSlot]]:
        return self._state.occupied_nodes()

    def _timer_for(self, project_context: ProjectContext, event: str) -> ProjectTimer:
        timer = self._state.timers.get(project_context)
        if timer is None:
            raise MissingContextError(project_context, event)
        return timer
