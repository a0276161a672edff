"""Identity value types derived from engine-supplied event context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

INVALID_ID = -1


class BuildEventContext(BaseModel):
    """The ``(project context, project instance, node)`` triple carried by every event.

    Build-level events carry no meaningful context; every id then stays
    at ``INVALID_ID``.
    """

    model_config = ConfigDict(frozen=True)

    project_context_id: int = INVALID_ID
    project_instance_id: int = INVALID_ID
    node_id: int = INVALID_ID


class ProjectContext(BaseModel):
    """One logical run (evaluation + build) of a project."""

    model_config = ConfigDict(frozen=True)

    id: int


class ProjectInstance(BaseModel):
    """One in-memory project object, possibly re-entered under several contexts."""

    model_config = ConfigDict(frozen=True)

    id: int


class ResolvedIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_context: ProjectContext
    project_instance: ProjectInstance
    node_index: int
