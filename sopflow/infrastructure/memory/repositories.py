"""In-memory repositories (implement ITemplateRepository, IWorkflowRepository).

Workflows are stored and handed out as deep copies, so callers never share
mutable state with the store or with each other. save() checks and bumps
the version without awaiting, which makes it atomic on the event loop.
"""

from __future__ import annotations

import copy

from sopflow.domain.entities import SOPTemplateEntity, WorkflowEntity
from sopflow.domain.enums import WorkflowStatus
from sopflow.domain.exceptions import (
    ResourceNotFoundException,
    ValidationException,
    WorkflowVersionConflictException,
)


class InMemoryTemplateRepository:
    """Template store; templates are frozen so they are shared, not copied."""

    def __init__(self) -> None:
        self._templates: dict[str, SOPTemplateEntity] = {}

    async def get_by_id(self, template_id: str) -> SOPTemplateEntity | None:
        return self._templates.get(template_id)

    async def list_all(self) -> list[SOPTemplateEntity]:
        return sorted(self._templates.values(), key=lambda t: (t.name, t.id))

    async def add(self, template: SOPTemplateEntity) -> SOPTemplateEntity:
        if template.id in self._templates:
            raise ValidationException(
                f"Template already exists: {template.id}", field="id"
            )
        self._templates[template.id] = template
        return template


class InMemoryWorkflowRepository:
    """Workflow aggregate store with optimistic version checks."""

    def __init__(self) -> None:
        self._workflows: dict[str, WorkflowEntity] = {}

    async def get_by_id(self, workflow_id: str) -> WorkflowEntity | None:
        stored = self._workflows.get(workflow_id)
        return copy.deepcopy(stored) if stored is not None else None

    async def get_for_update(self, workflow_id: str) -> WorkflowEntity | None:
        # Writers in this process are already serialized by the lock registry.
        return await self.get_by_id(workflow_id)

    async def add(self, workflow: WorkflowEntity) -> WorkflowEntity:
        if workflow.id in self._workflows:
            raise ValidationException(
                f"Workflow already exists: {workflow.id}", field="id"
            )
        self._workflows[workflow.id] = copy.deepcopy(workflow)
        return copy.deepcopy(workflow)

    async def save(self, workflow: WorkflowEntity) -> WorkflowEntity:
        stored = self._workflows.get(workflow.id)
        if stored is None:
            raise ResourceNotFoundException("workflow", workflow.id)
        if stored.version != workflow.version:
            raise WorkflowVersionConflictException(workflow.id, workflow.version)
        updated = copy.deepcopy(workflow)
        updated.version = workflow.version + 1
        self._workflows[workflow.id] = updated
        return copy.deepcopy(updated)

    async def list(
        self,
        *,
        status: WorkflowStatus | None = None,
        target_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[WorkflowEntity]:
        items = [
            w
            for w in self._workflows.values()
            if (status is None or w.status == status)
            and (target_id is None or w.target_id == target_id)
        ]
        items.sort(key=lambda w: (w.created_at, w.id), reverse=True)
        return [copy.deepcopy(w) for w in items[skip : skip + limit]]
