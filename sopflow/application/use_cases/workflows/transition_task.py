"""Transition task use case (start, complete with evidence, skip)."""

from __future__ import annotations

from sopflow.application.dtos import TaskSnapshot
from sopflow.application.interfaces.repositories import IWorkflowRepository
from sopflow.application.interfaces.services import IWorkflowLockRegistry
from sopflow.application.services.authorization_service import AuthorizationService
from sopflow.application.services.progress_calculator import ProgressCalculator
from sopflow.application.services.task_state_machine import TaskStateMachine
from sopflow.domain.enums import TaskAction
from sopflow.domain.exceptions import ResourceNotFoundException
from sopflow.shared.context import ActorContext


class TransitionTaskUseCase:
    """Authorize, then load/apply/save the owning workflow under its lock.

    Owner-approval tasks need task:approve on completion; that check runs
    after the task is loaded and before any task rule.
    """

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        authorization: AuthorizationService,
        locks: IWorkflowLockRegistry,
        state_machine: TaskStateMachine | None = None,
        progress: ProgressCalculator | None = None,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._authorization = authorization
        self._locks = locks
        self._state_machine = state_machine or TaskStateMachine()
        self._progress = progress or ProgressCalculator()

    async def execute(
        self,
        actor: ActorContext,
        workflow_id: str,
        task_id: str,
        action: TaskAction,
        evidence: str | None = None,
    ) -> TaskSnapshot:
        self._authorization.require_task_action(actor, action)
        async with self._locks.lock(workflow_id):
            workflow = await self._workflow_repo.get_for_update(workflow_id)
            if workflow is None:
                raise ResourceNotFoundException("workflow", workflow_id)
            task = workflow.get_task(task_id)
            self._authorization.require_approval(actor, task, action)
            self._state_machine.apply(workflow, task_id, action, evidence)
            saved = await self._workflow_repo.save(workflow)
        return self._progress.task_snapshot(saved, saved.get_task(task_id))
