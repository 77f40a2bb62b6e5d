"""Create workflow use case: instantiate a template for a target and persist it."""

from __future__ import annotations

from sopflow.application.dtos import WorkflowCreate, WorkflowSnapshot
from sopflow.application.interfaces.repositories import (
    ITemplateRepository,
    IWorkflowRepository,
)
from sopflow.application.services.authorization_service import AuthorizationService
from sopflow.application.services.progress_calculator import ProgressCalculator
from sopflow.application.services.workflow_factory import WorkflowFactory
from sopflow.domain.enums import Capability
from sopflow.domain.exceptions import ResourceNotFoundException
from sopflow.shared.context import ActorContext


class CreateWorkflowUseCase:
    """Authorizes, loads the template, instantiates and saves the new workflow."""

    def __init__(
        self,
        template_repo: ITemplateRepository,
        workflow_repo: IWorkflowRepository,
        factory: WorkflowFactory,
        authorization: AuthorizationService,
        progress: ProgressCalculator | None = None,
    ) -> None:
        self._template_repo = template_repo
        self._workflow_repo = workflow_repo
        self._factory = factory
        self._authorization = authorization
        self._progress = progress or ProgressCalculator()

    async def execute(self, actor: ActorContext, data: WorkflowCreate) -> WorkflowSnapshot:
        """Create the workflow and return its first snapshot.

        Raises:
            UnauthorizedException: Actor lacks workflow:create (nothing is loaded).
            ResourceNotFoundException: Unknown template id.
            ConfigurationException subclasses from the factory.
        """
        self._authorization.require(actor, Capability.WORKFLOW_CREATE)
        template = await self._template_repo.get_by_id(data.template_id)
        if template is None:
            raise ResourceNotFoundException("template", data.template_id)
        workflow = self._factory.instantiate(
            template,
            target_id=data.target_id,
            variant=data.variant,
            priority=data.priority,
            due_date=data.due_date,
        )
        created = await self._workflow_repo.add(workflow)
        return self._progress.snapshot(created)
