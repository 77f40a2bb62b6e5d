"""Workflow API: thin routes delegating to workflow use cases."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from sopflow.api.v1.dependencies import (
    get_actor,
    get_assign_task_use_case,
    get_completion_summary_use_case,
    get_create_workflow_use_case,
    get_get_workflow_use_case,
    get_list_workflows_use_case,
    get_transition_task_use_case,
    get_transition_workflow_use_case,
    get_update_workflow_use_case,
)
from sopflow.application.dtos import WorkflowCreate, WorkflowUpdate
from sopflow.application.use_cases.workflows import (
    AssignTaskUseCase,
    CreateWorkflowUseCase,
    GetCompletionSummaryUseCase,
    GetWorkflowUseCase,
    ListWorkflowsUseCase,
    TransitionTaskUseCase,
    TransitionWorkflowUseCase,
    UpdateWorkflowUseCase,
)
from sopflow.core.limiter import limit_writes
from sopflow.domain.enums import WorkflowStatus
from sopflow.schemas.workflow import (
    CompletionSummaryResponse,
    TaskAssignRequest,
    TaskResponse,
    TaskTransitionRequest,
    WorkflowCreateRequest,
    WorkflowListItem,
    WorkflowResponse,
    WorkflowTransitionRequest,
    WorkflowUpdateRequest,
)
from sopflow.shared.context import ActorContext

router = APIRouter()

Actor = Annotated[ActorContext, Depends(get_actor)]


@router.post("", response_model=WorkflowResponse, status_code=201)
@limit_writes
async def create_workflow(
    request: Request,
    body: WorkflowCreateRequest,
    actor: Actor,
    use_case: Annotated[CreateWorkflowUseCase, Depends(get_create_workflow_use_case)],
):
    """Instantiate a template for a target (tasks filtered by business variant)."""
    snapshot = await use_case.execute(
        actor,
        WorkflowCreate(
            template_id=body.template_id,
            target_id=body.target_id,
            variant=body.variant,
            priority=body.priority,
            due_date=body.due_date,
        ),
    )
    return WorkflowResponse.model_validate(snapshot)


@router.get("", response_model=list[WorkflowListItem])
async def list_workflows(
    actor: Actor,
    use_case: Annotated[ListWorkflowsUseCase, Depends(get_list_workflows_use_case)],
    status: WorkflowStatus | None = None,
    target_id: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List workflows, newest first."""
    snapshots = await use_case.execute(
        actor, status=status, target_id=target_id, skip=skip, limit=limit
    )
    return [WorkflowListItem.model_validate(s) for s in snapshots]


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: str,
    actor: Actor,
    use_case: Annotated[GetWorkflowUseCase, Depends(get_get_workflow_use_case)],
):
    """Get a workflow snapshot (tasks, derived status, progress)."""
    return WorkflowResponse.model_validate(await use_case.execute(actor, workflow_id))


@router.patch("/{workflow_id}", response_model=WorkflowResponse)
@limit_writes
async def update_workflow(
    request: Request,
    workflow_id: str,
    body: WorkflowUpdateRequest,
    actor: Actor,
    use_case: Annotated[UpdateWorkflowUseCase, Depends(get_update_workflow_use_case)],
):
    """Change priority and/or due date (refused once the workflow is completed)."""
    changes = body.model_dump(exclude_unset=True)
    snapshot = await use_case.execute(
        actor,
        workflow_id,
        WorkflowUpdate(
            fields=frozenset(changes),
            priority=changes.get("priority"),
            due_date=changes.get("due_date"),
        ),
    )
    return WorkflowResponse.model_validate(snapshot)


@router.get("/{workflow_id}/summary", response_model=CompletionSummaryResponse)
async def get_workflow_summary(
    workflow_id: str,
    actor: Actor,
    use_case: Annotated[
        GetCompletionSummaryUseCase, Depends(get_completion_summary_use_case)
    ],
):
    """Completion report: counts, estimated minutes, per-category breakdown."""
    return CompletionSummaryResponse.model_validate(
        await use_case.execute(actor, workflow_id)
    )


@router.post("/{workflow_id}/transitions", response_model=WorkflowResponse)
@limit_writes
async def transition_workflow(
    request: Request,
    workflow_id: str,
    body: WorkflowTransitionRequest,
    actor: Actor,
    use_case: Annotated[
        TransitionWorkflowUseCase, Depends(get_transition_workflow_use_case)
    ],
):
    """Start/resume, pause, complete or reopen a workflow."""
    snapshot = await use_case.execute(actor, workflow_id, body.action)
    return WorkflowResponse.model_validate(snapshot)


@router.post(
    "/{workflow_id}/tasks/{task_id}/transitions", response_model=TaskResponse
)
@limit_writes
async def transition_task(
    request: Request,
    workflow_id: str,
    task_id: str,
    body: TaskTransitionRequest,
    actor: Actor,
    use_case: Annotated[TransitionTaskUseCase, Depends(get_transition_task_use_case)],
):
    """Start, complete (with evidence) or skip a task."""
    snapshot = await use_case.execute(
        actor, workflow_id, task_id, body.action, evidence=body.evidence
    )
    return TaskResponse.model_validate(snapshot)


@router.put("/{workflow_id}/tasks/{task_id}/assignee", response_model=TaskResponse)
@limit_writes
async def assign_task(
    request: Request,
    workflow_id: str,
    task_id: str,
    body: TaskAssignRequest,
    actor: Actor,
    use_case: Annotated[AssignTaskUseCase, Depends(get_assign_task_use_case)],
):
    """Set or clear the task assignee."""
    snapshot = await use_case.execute(actor, workflow_id, task_id, body.assignee_id)
    return TaskResponse.model_validate(snapshot)
