"""Repository interfaces (ports) for the application layer.

Protocols define storage contracts; infrastructure provides in-memory and
SQLAlchemy implementations. Repositories hand out whole aggregates: a
workflow is always loaded and saved together with all of its tasks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sopflow.domain.entities import SOPTemplateEntity, WorkflowEntity
    from sopflow.domain.enums import WorkflowStatus


class ITemplateRepository(Protocol):
    """Protocol for published SOP template storage."""

    async def get_by_id(self, template_id: str) -> SOPTemplateEntity | None:
        """Return template by id or None."""
        ...

    async def list_all(self) -> list[SOPTemplateEntity]:
        """Return all published templates ordered by name."""
        ...

    async def add(self, template: SOPTemplateEntity) -> SOPTemplateEntity:
        """Persist a new (already validated) template."""
        ...


class IWorkflowRepository(Protocol):
    """Protocol for workflow aggregate storage with optimistic concurrency."""

    async def get_by_id(self, workflow_id: str) -> WorkflowEntity | None:
        """Return an independent copy of the workflow (with tasks) or None."""
        ...

    async def get_for_update(self, workflow_id: str) -> WorkflowEntity | None:
        """Like get_by_id, but reserves the workflow for the caller's write.

        SQL storage holds a transaction-scoped lock until commit, so a second
        writer loads only after the first one's changes are visible.
        """
        ...

    async def add(self, workflow: WorkflowEntity) -> WorkflowEntity:
        """Persist a newly instantiated workflow and its tasks atomically."""
        ...

    async def save(self, workflow: WorkflowEntity) -> WorkflowEntity:
        """Persist workflow and task changes.

        Succeeds only if the stored version equals workflow.version; the
        returned entity carries the incremented version. Raises
        WorkflowVersionConflictException otherwise.
        """
        ...

    async def list(
        self,
        *,
        status: WorkflowStatus | None = None,
        target_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[WorkflowEntity]:
        """Return workflows (newest first) with optional filters."""
        ...
