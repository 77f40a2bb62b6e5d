"""Workflow use cases."""

from sopflow.application.use_cases.workflows.assign_task import AssignTaskUseCase
from sopflow.application.use_cases.workflows.create_workflow import CreateWorkflowUseCase
from sopflow.application.use_cases.workflows.transition_task import TransitionTaskUseCase
from sopflow.application.use_cases.workflows.transition_workflow import (
    TransitionWorkflowUseCase,
)
from sopflow.application.use_cases.workflows.update_workflow import UpdateWorkflowUseCase
from sopflow.application.use_cases.workflows.workflow_queries import (
    GetCompletionSummaryUseCase,
    GetWorkflowUseCase,
    ListWorkflowsUseCase,
)

__all__ = [
    "AssignTaskUseCase",
    "CreateWorkflowUseCase",
    "GetCompletionSummaryUseCase",
    "GetWorkflowUseCase",
    "ListWorkflowsUseCase",
    "TransitionTaskUseCase",
    "TransitionWorkflowUseCase",
    "UpdateWorkflowUseCase",
]
