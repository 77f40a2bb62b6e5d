"""Progress calculator and workflow read-model builder.

Progress counts completed tasks only; skipped tasks satisfy gating and
completion readiness but do not move the percentage. A completed workflow
always reports 100.
"""

from sopflow.application.dtos import (
    CategoryProgress,
    CompletionSummary,
    EvidenceResult,
    TaskSnapshot,
    WorkflowSnapshot,
)
from sopflow.domain.entities import TaskEntity, WorkflowEntity
from sopflow.domain.enums import TaskCategory, TaskStatus, WorkflowStatus


def percentage(completed: int, total: int) -> int:
    """Return round-half-up(100 * completed / total) in [0, 100]; 0 when total is 0."""
    if total <= 0:
        return 0
    completed = max(0, min(completed, total))
    return (200 * completed + total) // (2 * total)


class ProgressCalculator:
    """Stateless derivations over a workflow's tasks."""

    def progress(self, workflow: WorkflowEntity) -> int:
        if workflow.status == WorkflowStatus.COMPLETED:
            return 100
        completed = sum(1 for t in workflow.tasks if t.status == TaskStatus.COMPLETED)
        return percentage(completed, len(workflow.tasks))

    def task_snapshot(self, workflow: WorkflowEntity, task: TaskEntity) -> TaskSnapshot:
        evidence = (
            EvidenceResult(task.evidence.kind, task.evidence.value, task.evidence.recorded_at)
            if task.evidence is not None
            else None
        )
        return TaskSnapshot(
            id=task.id,
            workflow_id=workflow.id,
            position=task.position,
            template_key=task.template_key,
            title=task.title,
            instructions=task.instructions,
            category=task.category,
            evidence_kind=task.evidence_kind,
            estimated_minutes=task.estimated_minutes,
            is_required=task.is_required,
            requires_owner_approval=task.requires_owner_approval,
            status=workflow.display_status(task),
            depends_on=tuple(task.depends_on),
            blocking_task_ids=tuple(workflow.blocking_task_ids(task)),
            assignee_id=task.assignee_id,
            evidence=evidence,
            started_at=task.started_at,
            completed_at=task.completed_at,
        )

    def snapshot(self, workflow: WorkflowEntity) -> WorkflowSnapshot:
        """Return an immutable snapshot with derived counts and progress."""
        return WorkflowSnapshot(
            id=workflow.id,
            template_id=workflow.template_id,
            template_name=workflow.template_name,
            workflow_type=workflow.workflow_type,
            target_id=workflow.target_id,
            variant=workflow.variant,
            priority=workflow.priority,
            status=workflow.status,
            created_at=workflow.created_at,
            due_date=workflow.due_date,
            started_at=workflow.started_at,
            completed_at=workflow.completed_at,
            version=workflow.version,
            total_count=len(workflow.tasks),
            completed_count=_count(workflow, TaskStatus.COMPLETED),
            skipped_count=_count(workflow, TaskStatus.SKIPPED),
            progress=self.progress(workflow),
            skipped_required_task_ids=tuple(
                t.id for t in workflow.skipped_required_tasks()
            ),
            tasks=tuple(self.task_snapshot(workflow, t) for t in workflow.tasks),
        )

    def summary(self, workflow: WorkflowEntity) -> CompletionSummary:
        """Return the completion report: counts, minutes and per-category breakdown."""
        categories: dict[TaskCategory, tuple[int, int, int]] = {}
        for task in workflow.tasks:
            total, completed, skipped = categories.get(task.category, (0, 0, 0))
            categories[task.category] = (
                total + 1,
                completed + (task.status == TaskStatus.COMPLETED),
                skipped + (task.status == TaskStatus.SKIPPED),
            )
        return CompletionSummary(
            workflow_id=workflow.id,
            status=workflow.status,
            progress=self.progress(workflow),
            total_count=len(workflow.tasks),
            completed_count=_count(workflow, TaskStatus.COMPLETED),
            skipped_count=_count(workflow, TaskStatus.SKIPPED),
            remaining_count=len(workflow.remaining_tasks()),
            skipped_required_task_ids=tuple(
                t.id for t in workflow.skipped_required_tasks()
            ),
            estimated_minutes_total=sum(t.estimated_minutes for t in workflow.tasks),
            estimated_minutes_completed=sum(
                t.estimated_minutes
                for t in workflow.tasks
                if t.status == TaskStatus.COMPLETED
            ),
            started_at=workflow.started_at,
            completed_at=workflow.completed_at,
            by_category=tuple(
                CategoryProgress(category, total, completed, skipped)
                for category, (total, completed, skipped) in categories.items()
            ),
        )


def _count(workflow: WorkflowEntity, status: TaskStatus) -> int:
    return sum(1 for t in workflow.tasks if t.status == status)
