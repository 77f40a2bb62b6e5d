"""Workflow repository (implements IWorkflowRepository). Returns domain entities.

get_for_update() takes pg_advisory_xact_lock keyed on the workflow id, so
writers queue until the previous writer's transaction ends and then read its
committed version. save() is a conditional UPDATE on (id, version); zero
matched rows means a writer outside that lock won and raises
WorkflowVersionConflictException, which rolls back the surrounding transaction.
"""

from __future__ import annotations

import copy
import hashlib
from typing import Any

from sqlalchemy import select, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from sopflow.domain.entities import TaskEntity, WorkflowEntity
from sopflow.domain.enums import (
    BusinessVariant,
    EvidenceKind,
    Priority,
    TaskCategory,
    TaskStatus,
    WorkflowStatus,
    WorkflowType,
)
from sopflow.domain.exceptions import (
    ResourceNotFoundException,
    WorkflowVersionConflictException,
)
from sopflow.domain.value_objects import Evidence
from sopflow.infrastructure.persistence.models.workflow import Workflow, WorkflowTask
from sopflow.infrastructure.persistence.repositories.base import BaseRepository
from sopflow.shared.utils.datetime import ensure_utc


def _advisory_lock_key(workflow_id: str) -> int:
    """Stable 63-bit key for pg_advisory_xact_lock."""
    raw = hashlib.sha256(f"workflow:{workflow_id}".encode()).digest()[:8]
    return int.from_bytes(raw, "big") % (2**63)


def _task_to_entity(t: WorkflowTask) -> TaskEntity:
    evidence_kind = EvidenceKind(t.evidence_kind)
    evidence = (
        Evidence(evidence_kind, t.evidence_value, ensure_utc(t.evidence_recorded_at))
        if t.evidence_value
        else None
    )
    return TaskEntity(
        id=t.id,
        position=t.position,
        template_key=t.template_key,
        title=t.title,
        instructions=t.instructions,
        category=TaskCategory(t.category),
        evidence_kind=evidence_kind,
        estimated_minutes=t.estimated_minutes,
        is_required=t.is_required,
        requires_owner_approval=t.requires_owner_approval,
        depends_on=list(t.depends_on or []),
        status=TaskStatus(t.status),
        assignee_id=t.assignee_id,
        evidence=evidence,
        started_at=ensure_utc(t.started_at),
        completed_at=ensure_utc(t.completed_at),
    )


def _workflow_to_entity(w: Workflow) -> WorkflowEntity:
    """Map Workflow ORM (with tasks loaded) to WorkflowEntity."""
    return WorkflowEntity(
        id=w.id,
        template_id=w.template_id,
        template_name=w.template_name,
        workflow_type=WorkflowType(w.workflow_type),
        target_id=w.target_id,
        variant=BusinessVariant(w.variant),
        priority=Priority(w.priority),
        status=WorkflowStatus(w.status),
        created_at=ensure_utc(w.created_at),
        due_date=w.due_date,
        started_at=ensure_utc(w.started_at),
        completed_at=ensure_utc(w.completed_at),
        tasks=[_task_to_entity(t) for t in w.tasks],
        version=w.version,
    )


def _task_state(task: TaskEntity) -> dict[str, Any]:
    """Mutable task columns written by save()."""
    return {
        "status": task.status.value,
        "assignee_id": task.assignee_id,
        "evidence_value": task.evidence.value if task.evidence else None,
        "evidence_recorded_at": task.evidence.recorded_at if task.evidence else None,
        "started_at": task.started_at,
        "completed_at": task.completed_at,
    }


class SqlWorkflowRepository(BaseRepository[Workflow]):
    """Workflow aggregate repository backed by workflow / workflow_task."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    async def get_by_id(self, workflow_id: str) -> WorkflowEntity | None:
        row = await self.get_model_by_id(workflow_id)
        return _workflow_to_entity(row) if row else None

    async def get_for_update(self, workflow_id: str) -> WorkflowEntity | None:
        # Held until the request transaction commits or rolls back.
        await self.db.execute(
            text("SELECT pg_advisory_xact_lock(:key)"),
            {"key": _advisory_lock_key(workflow_id)},
        )
        return await self.get_by_id(workflow_id)

    async def add(self, workflow: WorkflowEntity) -> WorkflowEntity:
        row = Workflow(
            id=workflow.id,
            template_id=workflow.template_id,
            template_name=workflow.template_name,
            workflow_type=workflow.workflow_type.value,
            target_id=workflow.target_id,
            variant=workflow.variant.value,
            priority=workflow.priority.value,
            status=workflow.status.value,
            due_date=workflow.due_date,
            started_at=workflow.started_at,
            completed_at=workflow.completed_at,
            created_at=workflow.created_at,
            version=workflow.version,
            tasks=[
                WorkflowTask(
                    id=t.id,
                    position=t.position,
                    template_key=t.template_key,
                    title=t.title,
                    instructions=t.instructions,
                    category=t.category.value,
                    evidence_kind=t.evidence_kind.value,
                    estimated_minutes=t.estimated_minutes,
                    is_required=t.is_required,
                    requires_owner_approval=t.requires_owner_approval,
                    depends_on=list(t.depends_on),
                    **_task_state(t),
                )
                for t in workflow.tasks
            ],
        )
        await self.create(row)
        return copy.deepcopy(workflow)

    async def save(self, workflow: WorkflowEntity) -> WorkflowEntity:
        result = await self.db.execute(
            update(Workflow)
            .where(Workflow.id == workflow.id, Workflow.version == workflow.version)
            .values(
                status=workflow.status.value,
                priority=workflow.priority.value,
                due_date=workflow.due_date,
                started_at=workflow.started_at,
                completed_at=workflow.completed_at,
                version=workflow.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            exists = await self.db.scalar(
                select(Workflow.id).where(Workflow.id == workflow.id)
            )
            if exists is None:
                raise ResourceNotFoundException("workflow", workflow.id)
            raise WorkflowVersionConflictException(workflow.id, workflow.version)

        for task in workflow.tasks:
            await self.db.execute(
                update(WorkflowTask)
                .where(
                    WorkflowTask.workflow_id == workflow.id,
                    WorkflowTask.id == task.id,
                )
                .values(**_task_state(task))
                .execution_options(synchronize_session=False)
            )
        await self.db.flush()
        saved = copy.deepcopy(workflow)
        saved.version = workflow.version + 1
        return saved

    async def list(
        self,
        *,
        status: WorkflowStatus | None = None,
        target_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[WorkflowEntity]:
        q = select(Workflow).order_by(Workflow.created_at.desc(), Workflow.id.desc())
        if status is not None:
            q = q.where(Workflow.status == status.value)
        if target_id is not None:
            q = q.where(Workflow.target_id == target_id)
        q = q.offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_workflow_to_entity(w) for w in result.scalars().all()]
