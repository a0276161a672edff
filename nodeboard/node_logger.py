"""NodeLogger — the facade a build engine registers as its node logger.

This is the only code that touches the event source.  It subscribes one
callback per event kind, translates each callback into a call on the
``StateTracker`` and owns the lifetime of the background refresh loop.
"""

from __future__ import annotations

import logging
import time
from types import TracebackType

from rich.console import Console

from nodeboard.config import DashboardConfig
from nodeboard.config import config as default_config
from nodeboard.core.event_bus import EventSource
from nodeboard.core.identity import ContextIdentityResolver
from nodeboard.core.state import DashboardState
from nodeboard.core.timer import Clock
from nodeboard.core.tracker import StateTracker
from nodeboard.models.events import (
    BuildEvent,
    ErrorEvent,
    EventKind,
    ProjectFinishedEvent,
    ProjectStartedEvent,
    TargetFinishedEvent,
    TargetStartedEvent,
    WarningEvent,
)
from nodeboard.monitor.renderer import ConsoleRenderer
from nodeboard.monitor.scheduler import RefreshScheduler

logger = logging.getLogger(__name__)

MINIMAL_VERBOSITY = "minimal"

# Observed but carrying nothing the dashboard needs.
_IGNORED_KINDS: frozenset[EventKind] = frozenset(
    {
        EventKind.BUILD_STARTED,
        EventKind.BUILD_FINISHED,
        EventKind.TASK_STARTED,
        EventKind.MESSAGE,
    }
)


class NodeLogger:
    """Live node dashboard attached to a build engine's event source.

    Parameters
    ----------
    console:
        Rich Console to draw on.  A new one is created if not provided.
    config:
        Dashboard configuration.  Defaults to the ``nodeboard.config``
        singleton.
    clock:
        Monotonic clock for project timers.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        config: DashboardConfig | None = None,
        clock: Clock = time.perf_counter,
    ) -> None:
        self.console = console or Console()
        self.config = config or default_config
        self._clock = clock

        self.state: DashboardState | None = None
        self.tracker: StateTracker | None = None
        self.renderer: ConsoleRenderer | None = None
        self.scheduler: RefreshScheduler | None = None

    # ------------------------------------------------------------------
    # Engine-facing properties (verbosity is fixed)
    # ------------------------------------------------------------------

    @property
    def verbosity(self) -> str:
        return MINIMAL_VERBOSITY

    @verbosity.setter
    def verbosity(self, value: str) -> None:
        logger.debug("Ignoring requested verbosity %r", value)

    @property
    def parameters(self) -> str:
        return ""

    @parameters.setter
    def parameters(self, value: str) -> None:
        logger.debug("Ignoring logger parameters %r", value)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, event_source: EventSource, node_count: int = 1) -> None:
        """Size the node table, subscribe to *event_source* and start refreshing."""
        if self.state is not None:
            raise RuntimeError("NodeLogger is already initialized")

        resolver = ContextIdentityResolver(node_count)
        self.state = DashboardState(node_count)
        self.renderer = ConsoleRenderer(
            self.state, self.console, width=self.config.terminal_width
        )
        self.tracker = StateTracker(
            self.state,
            self.renderer,
            resolver,
            diagnostic_policy=self.config.diagnostic_policy,
            clock=self._clock,
        )

        event_source.subscribe(EventKind.PROJECT_STARTED, self._on_project_started)
        event_source.subscribe(EventKind.PROJECT_FINISHED, self._on_project_finished)
        event_source.subscribe(EventKind.TARGET_STARTED, self._on_target_started)
        event_source.subscribe(EventKind.TARGET_FINISHED, self._on_target_finished)
        event_source.subscribe(EventKind.WARNING, self._on_warning)
        event_source.subscribe(EventKind.ERROR, self._on_error)
        for kind in _IGNORED_KINDS:
            event_source.subscribe(kind, self._ignore)

        self.scheduler = RefreshScheduler(
            self.renderer, interval=self.config.refresh_interval
        )
        self.scheduler.start()
        logger.info("Node dashboard initialized for %d node(s)", node_count)

    def shutdown(self) -> None:
        """Stop the refresh loop; returns after the dashboard has been erased."""
        if self.scheduler is None:
            return
        self.scheduler.stop()
        self.scheduler = None
        self.tracker = None
        self.renderer = None
        self.state = None
        logger.info("Node dashboard shut down")

    def __enter__(self) -> NodeLogger:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def _require_tracker(self) -> StateTracker:
        if self.tracker is None:
            raise RuntimeError("NodeLogger received an event while not initialized")
        return self.tracker

    def _on_project_started(self, event: ProjectStartedEvent) -> None:
        self._require_tracker().project_started(
            event.context, event.project_file, event.target_names
        )

    def _on_project_finished(self, event: ProjectFinishedEvent) -> None:
        self._require_tracker().project_finished(event.context, event.project_file)

    def _on_target_started(self, event: TargetStartedEvent) -> None:
        self._require_tracker().target_started(
            event.context, event.project_file, event.target_name
        )

    def _on_target_finished(self, event: TargetFinishedEvent) -> None:
        self._require_tracker().target_finished(event.context)

    def _on_warning(self, event: WarningEvent) -> None:
        self._require_tracker().warning_raised(event.context, event.message)

    def _on_error(self, event: ErrorEvent) -> None:
        self._require_tracker().error_raised(event.context, event.message)

    def _ignore(self, event: BuildEvent) -> None:
        pass
