"""Per-project and per-node records held by the dashboard state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from nodeboard.core.timer import ProjectTimer


class NotabilityRecord(BaseModel):
    """Written once at project start, read at project finish."""

    model_config = ConfigDict(frozen=True)

    is_notable: bool
    path: str
    requested_targets: str = ""


class NodeSlot(BaseModel):
    """What a single build node is doing right now.

    The timer is shared with the owning project context, so the elapsed
    time shown for a target is the time since its project started.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    project_path: str
    target_name: str
    timer: ProjectTimer

    @property
    def elapsed_seconds(self) -> float:
        return self.timer.elapsed_seconds
