"""Workflow state machine.

    not_started | paused --start--> in_progress
    in_progress --pause--> paused
    in_progress --complete--> completed   (every task completed or skipped)
    completed --reopen--> in_progress

Task statuses are never changed by workflow transitions.
"""

from collections.abc import Callable
from datetime import datetime

from sopflow.domain.entities import WorkflowEntity
from sopflow.domain.enums import WorkflowAction, WorkflowStatus
from sopflow.domain.exceptions import (
    IncompleteTasksException,
    InvalidTransitionException,
    ValidationException,
)
from sopflow.shared.telemetry.logging import get_logger
from sopflow.shared.utils.datetime import utc_now

logger = get_logger(__name__)

# action -> (allowed source statuses, target status)
_TRANSITIONS: dict[WorkflowAction, tuple[frozenset[WorkflowStatus], WorkflowStatus]] = {
    WorkflowAction.START: (
        frozenset({WorkflowStatus.NOT_STARTED, WorkflowStatus.PAUSED}),
        WorkflowStatus.IN_PROGRESS,
    ),
    WorkflowAction.PAUSE: (
        frozenset({WorkflowStatus.IN_PROGRESS}),
        WorkflowStatus.PAUSED,
    ),
    WorkflowAction.COMPLETE: (
        frozenset({WorkflowStatus.IN_PROGRESS}),
        WorkflowStatus.COMPLETED,
    ),
    WorkflowAction.REOPEN: (
        frozenset({WorkflowStatus.COMPLETED}),
        WorkflowStatus.IN_PROGRESS,
    ),
}


class WorkflowStateMachine:
    """Applies start/pause/complete/reopen to a workflow."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    @staticmethod
    def allowed_actions(status: WorkflowStatus) -> list[WorkflowAction]:
        """Return actions whose source set contains status (completion readiness not checked)."""
        return [a for a, (sources, _) in _TRANSITIONS.items() if status in sources]

    def apply(self, workflow: WorkflowEntity, action: WorkflowAction) -> WorkflowEntity:
        """Apply action in place and return the workflow.

        Raises:
            InvalidTransitionException: Workflow is not in a source status for action.
            IncompleteTasksException: Completing while tasks remain open.
        """
        if action not in _TRANSITIONS:
            raise ValidationException(f"Unknown workflow action: {action}", field="action")
        sources, target = _TRANSITIONS[action]
        if workflow.status not in sources:
            raise InvalidTransitionException(
                "workflow", workflow.id, workflow.status.value, action.value
            )

        previous = workflow.status
        now = self._clock()
        if action == WorkflowAction.START:
            if workflow.started_at is None:
                workflow.started_at = now
        elif action == WorkflowAction.COMPLETE:
            remaining = workflow.remaining_tasks()
            if remaining:
                raise IncompleteTasksException(
                    workflow.id, len(remaining), [t.id for t in remaining]
                )
            workflow.completed_at = now
            skipped_required = workflow.skipped_required_tasks()
            if skipped_required:
                logger.warning(
                    "Workflow %s completed with %d skipped required task(s): %s",
                    workflow.id,
                    len(skipped_required),
                    ", ".join(t.id for t in skipped_required),
                )
        elif action == WorkflowAction.REOPEN:
            workflow.completed_at = None

        workflow.status = target
        logger.info(
            "Workflow %s: %s (%s -> %s)",
            workflow.id,
            action.value,
            previous.value,
            target.value,
        )
        return workflow
