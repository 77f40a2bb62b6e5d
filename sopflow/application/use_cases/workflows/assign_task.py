"""Assign task use case: set or clear a task's assignee."""

from __future__ import annotations

from sopflow.application.dtos import TaskSnapshot
from sopflow.application.interfaces.repositories import IWorkflowRepository
from sopflow.application.interfaces.services import IWorkflowLockRegistry
from sopflow.application.services.authorization_service import AuthorizationService
from sopflow.application.services.progress_calculator import ProgressCalculator
from sopflow.domain.enums import Capability, WorkflowStatus
from sopflow.domain.exceptions import (
    InvalidTransitionException,
    ResourceNotFoundException,
)
from sopflow.shared.context import ActorContext
from sopflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class AssignTaskUseCase:
    """Assignment is allowed on open tasks of a workflow that is not completed."""

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        authorization: AuthorizationService,
        locks: IWorkflowLockRegistry,
        progress: ProgressCalculator | None = None,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._authorization = authorization
        self._locks = locks
        self._progress = progress or ProgressCalculator()

    async def execute(
        self,
        actor: ActorContext,
        workflow_id: str,
        task_id: str,
        assignee_id: str | None,
    ) -> TaskSnapshot:
        self._authorization.require(actor, Capability.TASK_ASSIGN)
        async with self._locks.lock(workflow_id):
            workflow = await self._workflow_repo.get_for_update(workflow_id)
            if workflow is None:
                raise ResourceNotFoundException("workflow", workflow_id)
            task = workflow.get_task(task_id)
            if workflow.status == WorkflowStatus.COMPLETED:
                raise InvalidTransitionException(
                    "workflow", workflow.id, workflow.status.value, "assign"
                )
            if task.is_terminal:
                raise InvalidTransitionException(
                    "task", task.id, task.status.value, "assign"
                )
            task.assignee_id = assignee_id or None
            saved = await self._workflow_repo.save(workflow)
        logger.info(
            "Workflow %s: task %s assigned to %s", workflow_id, task_id, assignee_id
        )
        return self._progress.task_snapshot(saved, saved.get_task(task_id))
