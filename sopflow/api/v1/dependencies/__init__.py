"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
"""

from sopflow.api.v1.dependencies.auth import get_actor
from sopflow.api.v1.dependencies.templates import (
    get_get_template_use_case,
    get_list_templates_use_case,
    get_publish_template_use_case,
)
from sopflow.api.v1.dependencies.workflows import (
    get_assign_task_use_case,
    get_completion_summary_use_case,
    get_create_workflow_use_case,
    get_get_workflow_use_case,
    get_list_workflows_use_case,
    get_transition_task_use_case,
    get_transition_workflow_use_case,
    get_update_workflow_use_case,
)

__all__ = [
    "get_actor",
    "get_assign_task_use_case",
    "get_completion_summary_use_case",
    "get_create_workflow_use_case",
    "get_get_template_use_case",
    "get_get_workflow_use_case",
    "get_list_templates_use_case",
    "get_list_workflows_use_case",
    "get_publish_template_use_case",
    "get_transition_task_use_case",
    "get_transition_workflow_use_case",
    "get_update_workflow_use_case",
]
