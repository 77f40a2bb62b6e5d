"""Update workflow use case: change priority and/or due date."""

from __future__ import annotations

from sopflow.application.dtos import WorkflowSnapshot, WorkflowUpdate
from sopflow.application.interfaces.repositories import IWorkflowRepository
from sopflow.application.interfaces.services import IWorkflowLockRegistry
from sopflow.application.services.authorization_service import AuthorizationService
from sopflow.application.services.progress_calculator import ProgressCalculator
from sopflow.domain.enums import Capability, WorkflowStatus
from sopflow.domain.exceptions import (
    InvalidTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from sopflow.shared.context import ActorContext
from sopflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_UPDATABLE = frozenset({"priority", "due_date"})


class UpdateWorkflowUseCase:
    """Edit scheduling fields of a workflow that is not completed. Tasks are untouched."""

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
        self, actor: ActorContext, workflow_id: str, data: WorkflowUpdate
    ) -> WorkflowSnapshot:
        """Apply the named fields and return the saved snapshot.

        Raises:
            UnauthorizedException: Before any load.
            ValidationException: No fields, unknown field, or a null priority.
            ResourceNotFoundException: Unknown workflow.
            InvalidTransitionException: Workflow is completed.
        """
        self._authorization.require(actor, Capability.WORKFLOW_UPDATE)
        if not data.fields:
            raise ValidationException("No fields to update")
        unknown = data.fields - _UPDATABLE
        if unknown:
            raise ValidationException(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        if "priority" in data.fields and data.priority is None:
            raise ValidationException("priority cannot be cleared", field="priority")

        async with self._locks.lock(workflow_id):
            workflow = await self._workflow_repo.get_for_update(workflow_id)
            if workflow is None:
                raise ResourceNotFoundException("workflow", workflow_id)
            if workflow.status == WorkflowStatus.COMPLETED:
                raise InvalidTransitionException(
                    "workflow", workflow.id, workflow.status.value, "update"
                )
            if "priority" in data.fields:
                workflow.priority = data.priority
            if "due_date" in data.fields:
                workflow.due_date = data.due_date
            saved = await self._workflow_repo.save(workflow)
        logger.info(
            "Workflow %s updated (%s)", workflow_id, ", ".join(sorted(data.fields))
        )
        return self._progress.snapshot(saved)
