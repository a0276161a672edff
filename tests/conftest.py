"""Shared test fixtures for nodeboard."""

from __future__ import annotations

import io
from collections.abc import Callable

import pytest
from rich.console import Console

from nodeboard.core.identity import ContextIdentityResolver
from nodeboard.core.state import DashboardState
from nodeboard.core.tracker import DiagnosticPolicy, StateTracker
from nodeboard.models.identity import BuildEventContext
from nodeboard.monitor.renderer import ConsoleRenderer


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def output() -> io.StringIO:
    """Captures everything the dashboard writes."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    return Console(file=output, width=80)


@pytest.fixture
def state() -> DashboardState:
    """A two-node dashboard state."""
    return DashboardState(node_count=2)


@pytest.fixture
def renderer(state: DashboardState, console: Console) -> ConsoleRenderer:
    return ConsoleRenderer(state, console)


@pytest.fixture
def tracker(
    state: DashboardState, renderer: ConsoleRenderer, clock: FakeClock
) -> StateTracker:
    return StateTracker(
        state,
        renderer,
        ContextIdentityResolver(state.node_count),
        diagnostic_policy=DiagnosticPolicy.FAIL,
        clock=clock,
    )


@pytest.fixture
def make_context() -> Callable[..., BuildEventContext]:
    """Factory fixture: build a BuildEventContext, instance defaulting to the context id."""

    def _factory(ctx: int = 1, inst: int | None = None, node: int = 1) -> BuildEventContext:
        return BuildEventContext(
            project_context_id=ctx,
            project_instance_id=ctx if inst is None else inst,
            node_id=node,
        )

    return _factory
