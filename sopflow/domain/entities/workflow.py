"""Workflow and task domain entities.

A workflow is a frozen instantiation of an SOP template for one target
(location) and one business variant. It owns its tasks exclusively; tasks
are created with the workflow and never added or removed afterwards.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from sopflow.domain.enums import (
    BusinessVariant,
    EvidenceKind,
    Priority,
    TaskCategory,
    TaskStatus,
    WorkflowStatus,
    WorkflowType,
)
from sopflow.domain.exceptions import ResourceNotFoundException
from sopflow.domain.value_objects import Evidence


@dataclass
class TaskEntity:
    """Domain entity for a task owned by a workflow.

    Title through requires_owner_approval are a snapshot of the task
    template at instantiation time. depends_on holds sibling task ids.
    """

    id: str
    position: int
    template_key: str
    title: str
    instructions: str
    category: TaskCategory
    evidence_kind: EvidenceKind
    estimated_minutes: int
    is_required: bool
    requires_owner_approval: bool
    depends_on: list[str] = field(default_factory=list)
    status: TaskStatus = TaskStatus.PENDING
    assignee_id: str | None = None
    evidence: Evidence | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def requires_evidence(self) -> bool:
        return self.evidence_kind != EvidenceKind.NONE

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


@dataclass
class WorkflowEntity:
    """Domain entity for a workflow (aggregate root over its tasks).

    version is the optimistic-concurrency counter; storage increments it on
    every successful save.
    """

    id: str
    template_id: str
    template_name: str
    workflow_type: WorkflowType
    target_id: str
    variant: BusinessVariant
    priority: Priority
    status: WorkflowStatus
    created_at: datetime
    due_date: date | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    tasks: list[TaskEntity] = field(default_factory=list)
    version: int = 1

    @property
    def is_active(self) -> bool:
        return self.status == WorkflowStatus.IN_PROGRESS

    def get_task(self, task_id: str) -> TaskEntity:
        """Return the task with the given id.

        Raises:
            ResourceNotFoundException: If no task with that id belongs to this workflow.
        """
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise ResourceNotFoundException("task", task_id)

    def blocking_task_ids(self, task: TaskEntity) -> list[str]:
        """Return ids of the task's dependencies that are not completed or skipped."""
        by_id = {t.id: t for t in self.tasks}
        return [
            dep_id
            for dep_id in task.depends_on
            if dep_id in by_id and not by_id[dep_id].is_terminal
        ]

    def is_blocked(self, task: TaskEntity) -> bool:
        """Return whether the task is open with at least one unsatisfied dependency."""
        if task.status not in (TaskStatus.PENDING, TaskStatus.IN_PROGRESS):
            return False
        return bool(self.blocking_task_ids(task))

    def display_status(self, task: TaskEntity) -> TaskStatus:
        """Return the status shown to users (BLOCKED is derived, never stored)."""
        return TaskStatus.BLOCKED if self.is_blocked(task) else task.status

    def remaining_tasks(self) -> list[TaskEntity]:
        """Return tasks that are neither completed nor skipped, in order."""
        return [t for t in self.tasks if not t.is_terminal]

    def skipped_required_tasks(self) -> list[TaskEntity]:
        """Return required tasks that were skipped rather than completed."""
        return [
            t for t in self.tasks if t.is_required and t.status == TaskStatus.SKIPPED
        ]
