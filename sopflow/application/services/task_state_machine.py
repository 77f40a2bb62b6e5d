"""Task state machine: legal task transitions and dependency gating.

    pending --start--> in_progress --complete--> completed
    pending --complete--> completed        (evidence kind 'none' only)
    pending | in_progress --skip--> skipped

blocked is never stored; it is derived from dependencies by the workflow
entity. Every transition requires the parent workflow to be in_progress.
Mutates the task in place; persistence is the caller's job.
"""

from collections.abc import Callable
from datetime import datetime

from sopflow.domain.entities import TaskEntity, WorkflowEntity
from sopflow.domain.enums import EvidenceKind, TaskAction, TaskStatus
from sopflow.domain.exceptions import (
    DependencyNotSatisfiedException,
    EvidenceRequiredException,
    InvalidTransitionException,
    ValidationException,
    WorkflowNotActiveException,
)
from sopflow.domain.value_objects import Evidence
from sopflow.shared.telemetry.logging import get_logger
from sopflow.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class TaskStateMachine:
    """Applies start/complete/skip to one task of a workflow."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    def apply(
        self,
        workflow: WorkflowEntity,
        task_id: str,
        action: TaskAction,
        evidence: str | None = None,
    ) -> TaskEntity:
        """Dispatch action to the matching transition and return the updated task.

        Raises:
            ResourceNotFoundException: task_id is not part of the workflow.
            WorkflowNotActiveException: Workflow is not in_progress.
            BusinessRuleException subclasses for illegal transitions.
        """
        task = workflow.get_task(task_id)
        if action == TaskAction.START:
            self.start(workflow, task)
        elif action == TaskAction.COMPLETE:
            self.complete(workflow, task, evidence)
        elif action == TaskAction.SKIP:
            self.skip(workflow, task)
        else:
            raise ValidationException(f"Unknown task action: {action}", field="action")
        return task

    def _require_active(self, workflow: WorkflowEntity) -> None:
        if not workflow.is_active:
            raise WorkflowNotActiveException(workflow.id, workflow.status.value)

    def _require_unblocked(self, workflow: WorkflowEntity, task: TaskEntity) -> None:
        blocking = workflow.blocking_task_ids(task)
        if blocking:
            raise DependencyNotSatisfiedException(task.id, blocking)

    def start(self, workflow: WorkflowEntity, task: TaskEntity) -> None:
        """pending -> in_progress, only when every dependency is completed or skipped."""
        self._require_active(workflow)
        if task.status != TaskStatus.PENDING:
            raise InvalidTransitionException(
                "task", task.id, task.status.value, TaskAction.START.value
            )
        self._require_unblocked(workflow, task)
        task.status = TaskStatus.IN_PROGRESS
        task.started_at = self._clock()
        logger.info("Workflow %s: task %s started", workflow.id, task.id)

    def complete(
        self,
        workflow: WorkflowEntity,
        task: TaskEntity,
        evidence: str | None = None,
    ) -> None:
        """in_progress -> completed (or pending -> completed for evidence kind 'none').

        Evidence is recorded with the task's evidence kind. URL evidence must
        be an http(s) URL.
        """
        self._require_active(workflow)
        allowed_from = {TaskStatus.IN_PROGRESS}
        if task.evidence_kind == EvidenceKind.NONE:
            allowed_from.add(TaskStatus.PENDING)
        if task.status not in allowed_from:
            raise InvalidTransitionException(
                "task", task.id, task.status.value, TaskAction.COMPLETE.value
            )
        self._require_unblocked(workflow, task)

        now = self._clock()
        recorded: Evidence | None = None
        if task.requires_evidence:
            if evidence is None or not evidence.strip():
                raise EvidenceRequiredException(task.id, task.evidence_kind.value)
            try:
                recorded = Evidence(task.evidence_kind, evidence.strip(), now)
            except ValueError as e:
                raise ValidationException(str(e), field="evidence") from e

        task.status = TaskStatus.COMPLETED
        task.evidence = recorded
        if task.started_at is None:
            task.started_at = now
        task.completed_at = now
        logger.info("Workflow %s: task %s completed", workflow.id, task.id)

    def skip(self, workflow: WorkflowEntity, task: TaskEntity) -> None:
        """pending | in_progress -> skipped. Required tasks may be skipped; they are reported."""
        self._require_active(workflow)
        if task.status not in (TaskStatus.PENDING, TaskStatus.IN_PROGRESS):
            raise InvalidTransitionException(
                "task", task.id, task.status.value, TaskAction.SKIP.value
            )
        task.status = TaskStatus.SKIPPED
        task.completed_at = self._clock()
        if task.is_required:
            logger.warning(
                "Workflow %s: required task %s skipped", workflow.id, task.id
            )
        else:
            logger.info("Workflow %s: task %s skipped", workflow.id, task.id)
