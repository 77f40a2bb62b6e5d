"""SOP template API: thin routes delegating to template use cases."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from sopflow.api.v1.dependencies import (
    get_actor,
    get_get_template_use_case,
    get_list_templates_use_case,
    get_publish_template_use_case,
)
from sopflow.application.use_cases.templates import (
    GetTemplateUseCase,
    ListTemplatesUseCase,
    PublishTemplateUseCase,
)
from sopflow.core.limiter import limit_publish
from sopflow.schemas.template import (
    TemplateCreateRequest,
    TemplateResponse,
    TemplateSummaryResponse,
)
from sopflow.shared.context import ActorContext

router = APIRouter()


@router.get("", response_model=list[TemplateSummaryResponse])
async def list_templates(
    actor: Annotated[ActorContext, Depends(get_actor)],
    use_case: Annotated[ListTemplatesUseCase, Depends(get_list_templates_use_case)],
):
    """List published templates."""
    templates = await use_case.execute(actor)
    return [TemplateSummaryResponse.from_entity(t) for t in templates]


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: str,
    actor: Annotated[ActorContext, Depends(get_actor)],
    use_case: Annotated[GetTemplateUseCase, Depends(get_get_template_use_case)],
):
    """Get a template with its ordered tasks."""
    return TemplateResponse.from_entity(await use_case.execute(actor, template_id))


@router.post("", response_model=TemplateResponse, status_code=201)
@limit_publish
async def publish_template(
    request: Request,
    body: TemplateCreateRequest,
    actor: Annotated[ActorContext, Depends(get_actor)],
    use_case: Annotated[PublishTemplateUseCase, Depends(get_publish_template_use_case)],
):
    """Validate and publish a template (dependency graph must be a DAG)."""
    template = await use_case.execute(actor, body.to_entity())
    return TemplateResponse.from_entity(template)
