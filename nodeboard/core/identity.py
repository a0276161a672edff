"""Context identity resolution — engine event context -> small identities."""

from __future__ import annotations

from nodeboard.models.identity import (
    BuildEventContext,
    ProjectContext,
    ProjectInstance,
    ResolvedIdentity,
)


class ContextIdentityResolver:
    """Derives project context, project instance and node index from an event context.

    Stateless apart from the node count used for bounds checks.  Engine
    node ids are 1-based; node indexes are 0-based.

    Parameters
    ----------
    node_count:
        Number of build nodes declared by the engine.  Must be >= 1.
    """

    def __init__(self, node_count: int) -> None:
        if node_count < 1:
            raise ValueError(f"node_count must be >= 1, got {node_count}")
        self._node_count = node_count

    @property
    def node_count(self) -> int:
        return self._node_count

    def resolve(self, context: BuildEventContext) -> ResolvedIdentity:
        return ResolvedIdentity(
            project_context=self.project_context(context),
            project_instance=self.project_instance(context),
            node_index=self.node_index(context),
        )

    @staticmethod
    def project_context(context: BuildEventContext) -> ProjectContext:
        return ProjectContext(id=context.project_context_id)

    @staticmethod
    def project_instance(context: BuildEventContext) -> ProjectInstance:
        return ProjectInstance(id=context.project_instance_id)

    @staticmethod
    def node_index(context: BuildEventContext) -> int:
        return context.node_id - 1

    def in_range(self, node_index: int) -> bool:
        """Whether *node_index* addresses a row of the fixed-size node table."""
        return 0 <= node_index < self._node_count
