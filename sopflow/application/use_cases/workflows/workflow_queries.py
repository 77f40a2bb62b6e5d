"""Read-only workflow use cases: get, list, completion summary.

Reads take no lock; each call loads an independent copy of the aggregate,
so repeated reads with no intervening writes return equal snapshots.
"""

from __future__ import annotations

from sopflow.application.dtos import CompletionSummary, WorkflowSnapshot
from sopflow.application.interfaces.repositories import IWorkflowRepository
from sopflow.application.services.authorization_service import AuthorizationService
from sopflow.application.services.progress_calculator import ProgressCalculator
from sopflow.domain.entities import WorkflowEntity
from sopflow.domain.enums import Capability, WorkflowStatus
from sopflow.domain.exceptions import ResourceNotFoundException
from sopflow.shared.context import ActorContext


class _WorkflowReader:
    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        authorization: AuthorizationService,
        progress: ProgressCalculator | None = None,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._authorization = authorization
        self._progress = progress or ProgressCalculator()

    async def _load(self, actor: ActorContext, workflow_id: str) -> WorkflowEntity:
        self._authorization.require(actor, Capability.WORKFLOW_VIEW)
        workflow = await self._workflow_repo.get_by_id(workflow_id)
        if workflow is None:
            raise ResourceNotFoundException("workflow", workflow_id)
        return workflow


class GetWorkflowUseCase(_WorkflowReader):
    """GetWorkflow: snapshot or ResourceNotFoundException."""

    async def execute(self, actor: ActorContext, workflow_id: str) -> WorkflowSnapshot:
        return self._progress.snapshot(await self._load(actor, workflow_id))


class GetCompletionSummaryUseCase(_WorkflowReader):
    """Completion report (counts, minutes, per-category breakdown)."""

    async def execute(self, actor: ActorContext, workflow_id: str) -> CompletionSummary:
        return self._progress.summary(await self._load(actor, workflow_id))


class ListWorkflowsUseCase(_WorkflowReader):
    """List workflows, newest first, optionally filtered by status and target."""

    async def execute(
        self,
        actor: ActorContext,
        *,
        status: WorkflowStatus | None = None,
        target_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[WorkflowSnapshot]:
        self._authorization.require(actor, Capability.WORKFLOW_VIEW)
        workflows = await self._workflow_repo.list(
            status=status, target_id=target_id, skip=skip, limit=limit
        )
        return [self._progress.snapshot(w) for w in workflows]
