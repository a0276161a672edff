"""Inbound build lifecycle events.

Every event is a frozen Pydantic model tagged with an ``EventKind``.  The
engine adapter (or ``EventBus.receive`` for serialized streams) produces
these; the ``NodeLogger`` facade is the only consumer that reads them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from nodeboard.models.identity import BuildEventContext


class EventKind(str, Enum):
    """Lifecycle event types delivered by the build engine."""

    BUILD_STARTED = "build_started"
    BUILD_FINISHED = "build_finished"
    PROJECT_STARTED = "project_started"
    PROJECT_FINISHED = "project_finished"
    TARGET_STARTED = "target_started"
    TARGET_FINISHED = "target_finished"
    TASK_STARTED = "task_started"
    MESSAGE = "message"
    WARNING = "warning"
    ERROR = "error"


class BuildEventBase(BaseModel):
    """Fields shared by every build event."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    context: BuildEventContext = Field(default_factory=BuildEventContext)
    message: str = ""
    timestamp_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class BuildStartedEvent(BuildEventBase):
    kind: EventKind = EventKind.BUILD_STARTED


class BuildFinishedEvent(BuildEventBase):
    kind: EventKind = EventKind.BUILD_FINISHED
    succeeded: bool = True


class ProjectStartedEvent(BuildEventBase):
    """A project context began building.

    ``target_names`` is the engine's joined list of explicitly requested
    targets; empty means the default targets.
    """

    kind: EventKind = EventKind.PROJECT_STARTED
    project_file: str
    target_names: str = ""


class ProjectFinishedEvent(BuildEventBase):
    kind: EventKind = EventKind.PROJECT_FINISHED
    project_file: str
    succeeded: bool = True


class TargetStartedEvent(BuildEventBase):
    kind: EventKind = EventKind.TARGET_STARTED
    project_file: str
    target_name: str


class TargetFinishedEvent(BuildEventBase):
    kind: EventKind = EventKind.TARGET_FINISHED
    project_file: str
    target_name: str
    succeeded: bool = True


class TaskStartedEvent(BuildEventBase):
    kind: EventKind = EventKind.TASK_STARTED
    task_name: str = ""


class MessageEvent(BuildEventBase):
    kind: EventKind = EventKind.MESSAGE


class WarningEvent(BuildEventBase):
    kind: EventKind = EventKind.WARNING
    code: str = ""
    file: str = ""


class ErrorEvent(BuildEventBase):
    kind: EventKind = EventKind.ERROR
    code: str = ""
    file: str = ""


BuildEvent = Union[
    BuildStartedEvent,
    BuildFinishedEvent,
    ProjectStartedEvent,
    ProjectFinishedEvent,
    TargetStartedEvent,
    TargetFinishedEvent,
    TaskStartedEvent,
    MessageEvent,
    WarningEvent,
    ErrorEvent,
]

# Map from EventKind to the concrete model class for deserialization.
EVENT_TYPE_MAP: dict[EventKind, type[BuildEventBase]] = {
    EventKind.BUILD_STARTED: BuildStartedEvent,
    EventKind.BUILD_FINISHED: BuildFinishedEvent,
    EventKind.PROJECT_STARTED: ProjectStartedEvent,
    EventKind.PROJECT_FINISHED: ProjectFinishedEvent,
    EventKind.TARGET_STARTED: TargetStartedEvent,
    EventKind.TARGET_FINISHED: TargetFinishedEvent,
    EventKind.TASK_STARTED: TaskStartedEvent,
    EventKind.MESSAGE: MessageEvent,
    EventKind.WARNING: WarningEvent,
    EventKind.ERROR: ErrorEvent,
}
