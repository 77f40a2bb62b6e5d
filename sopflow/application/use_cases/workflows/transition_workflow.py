"""Transition workflow use case (start/resume, pause, complete, reopen)."""

from __future__ import annotations

from sopflow.application.dtos import WorkflowSnapshot
from sopflow.application.interfaces.repositories import IWorkflowRepository
from sopflow.application.interfaces.services import IWorkflowLockRegistry
from sopflow.application.services.authorization_service import AuthorizationService
from sopflow.application.services.progress_calculator import ProgressCalculator
from sopflow.application.services.workflow_state_machine import WorkflowStateMachine
from sopflow.domain.enums import WorkflowAction
from sopflow.domain.exceptions import ResourceNotFoundException
from sopflow.shared.context import ActorContext


class TransitionWorkflowUseCase:
    """Authorize, then load/apply/save under the workflow's lock."""

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        authorization: AuthorizationService,
        locks: IWorkflowLockRegistry,
        state_machine: WorkflowStateMachine | None = None,
        progress: ProgressCalculator | None = None,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._authorization = authorization
        self._locks = locks
        self._state_machine = state_machine or WorkflowStateMachine()
        self._progress = progress or ProgressCalculator()

    async def execute(
        self,
        actor: ActorContext,
        workflow_id: str,
        action: WorkflowAction,
    ) -> WorkflowSnapshot:
        """Apply action and return the saved snapshot.

        Raises:
            UnauthorizedException: Before any load.
            ResourceNotFoundException: Unknown workflow.
            InvalidTransitionException, IncompleteTasksException: Rule rejections.
            WorkflowVersionConflictException: A concurrent writer saved first.
        """
        self._authorization.require_workflow_action(actor, action)
        async with self._locks.lock(workflow_id):
            workflow = await self._workflow_repo.get_for_update(workflow_id)
            if workflow is None:
                raise ResourceNotFoundException("workflow", workflow_id)
            self._state_machine.apply(workflow, action)
            saved = await self._workflow_repo.save(workflow)
        return self._progress.snapshot(saved)
