"""Template use cases: list, get and publish (validated) SOP templates."""

from __future__ import annotations

import dataclasses

from sopflow.application.interfaces.repositories import ITemplateRepository
from sopflow.application.services.authorization_service import AuthorizationService
from sopflow.application.services.template_validator import TemplateValidator
from sopflow.domain.entities import SOPTemplateEntity
from sopflow.domain.enums import Capability
from sopflow.domain.exceptions import ResourceNotFoundException, ValidationException
from sopflow.shared.context import ActorContext
from sopflow.shared.telemetry.logging import get_logger
from sopflow.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


class ListTemplatesUseCase:
    def __init__(
        self, template_repo: ITemplateRepository, authorization: AuthorizationService
    ) -> None:
        self._template_repo = template_repo
        self._authorization = authorization

    async def execute(self, actor: ActorContext) -> list[SOPTemplateEntity]:
        self._authorization.require(actor, Capability.TEMPLATE_VIEW)
        return await self._template_repo.list_all()


class GetTemplateUseCase:
    def __init__(
        self, template_repo: ITemplateRepository, authorization: AuthorizationService
    ) -> None:
        self._template_repo = template_repo
        self._authorization = authorization

    async def execute(self, actor: ActorContext, template_id: str) -> SOPTemplateEntity:
        self._authorization.require(actor, Capability.TEMPLATE_VIEW)
        template = await self._template_repo.get_by_id(template_id)
        if template is None:
            raise ResourceNotFoundException("template", template_id)
        return template


class PublishTemplateUseCase:
    """Validates and stores a new template. Published templates are immutable."""

    def __init__(
        self,
        template_repo: ITemplateRepository,
        authorization: AuthorizationService,
        validator: TemplateValidator | None = None,
    ) -> None:
        self._template_repo = template_repo
        self._authorization = authorization
        self._validator = validator or TemplateValidator()

    async def execute(
        self, actor: ActorContext, template: SOPTemplateEntity
    ) -> SOPTemplateEntity:
        """Publish template; an empty id is replaced by a generated one.

        Raises:
            UnauthorizedException: Actor lacks template:publish.
            ValidationException: Authoring rule violated or id already taken.
            CyclicDependencyException, DanglingDependencyException: Bad dependency graph.
        """
        self._authorization.require(actor, Capability.TEMPLATE_PUBLISH)
        if not template.id:
            template = dataclasses.replace(template, id=generate_cuid())
        self._validator.validate(template)
        if await self._template_repo.get_by_id(template.id) is not None:
            raise ValidationException(
                f"Template already exists: {template.id}", field="id"
            )
        created = await self._template_repo.add(template)
        logger.info(
            "Published template %s (%s) with %d tasks",
            created.id,
            created.name,
            len(created.tasks),
        )
        return created
