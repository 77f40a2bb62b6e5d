"""Application services: classification, validation, instantiation, state machines."""

from sopflow.application.services.authorization_service import AuthorizationService
from sopflow.application.services.dependency_validator import DependencyGraphValidator
from sopflow.application.services.progress_calculator import (
    ProgressCalculator,
    percentage,
)
from sopflow.application.services.task_state_machine import TaskStateMachine
from sopflow.application.services.template_validator import TemplateValidator
from sopflow.application.services.variant_classifier import (
    DEFAULT_EXCLUSIONS,
    VariantClassifier,
)
from sopflow.application.services.workflow_factory import WorkflowFactory
from sopflow.application.services.workflow_state_machine import WorkflowStateMachine

__all__ = [
    "AuthorizationService",
    "DEFAULT_EXCLUSIONS",
    "DependencyGraphValidator",
    "ProgressCalculator",
    "TaskStateMachine",
    "TemplateValidator",
    "VariantClassifier",
    "WorkflowFactory",
    "WorkflowStateMachine",
    "percentage",
]
