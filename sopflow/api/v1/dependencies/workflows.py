"""Workflow use case providers (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from sopflow.api.v1.dependencies.common import (
    Authz,
    Locks,
    TemplateRepo,
    WorkflowRepo,
    get_workflow_factory,
)
from sopflow.application.services import WorkflowFactory
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


def get_create_workflow_use_case(
    template_repo: TemplateRepo,
    workflow_repo: WorkflowRepo,
    authz: Authz,
    factory: Annotated[WorkflowFactory, Depends(get_workflow_factory)],
) -> CreateWorkflowUseCase:
    return CreateWorkflowUseCase(template_repo, workflow_repo, factory, authz)


def get_transition_workflow_use_case(
    workflow_repo: WorkflowRepo, authz: Authz, locks: Locks
) -> TransitionWorkflowUseCase:
    return TransitionWorkflowUseCase(workflow_repo, authz, locks)


def get_transition_task_use_case(
    workflow_repo: WorkflowRepo, authz: Authz, locks: Locks
) -> TransitionTaskUseCase:
    return TransitionTaskUseCase(workflow_repo, authz, locks)


def get_update_workflow_use_case(
    workflow_repo: WorkflowRepo, authz: Authz, locks: Locks
) -> UpdateWorkflowUseCase:
    return UpdateWorkflowUseCase(workflow_repo, authz, locks)


def get_assign_task_use_case(
    workflow_repo: WorkflowRepo, authz: Authz, locks: Locks
) -> AssignTaskUseCase:
    return AssignTaskUseCase(workflow_repo, authz, locks)


def get_get_workflow_use_case(workflow_repo: WorkflowRepo, authz: Authz) -> GetWorkflowUseCase:
    return GetWorkflowUseCase(workflow_repo, authz)


def get_list_workflows_use_case(
    workflow_repo: WorkflowRepo, authz: Authz
) -> ListWorkflowsUseCase:
    return ListWorkflowsUseCase(workflow_repo, authz)


def get_completion_summary_use_case(
    workflow_repo: WorkflowRepo, authz: Authz
) -> GetCompletionSummaryUseCase:
    return GetCompletionSummaryUseCase(workflow_repo, authz)
