"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from sopflow.domain.entities import (
    SOPTemplateEntity,
    TaskEntity,
    TaskTemplateEntity,
    WorkflowEntity,
)
from sopflow.domain.enums import (
    BusinessVariant,
    Capability,
    EvidenceKind,
    Priority,
    TaskAction,
    TaskCategory,
    TaskStatus,
    WorkflowAction,
    WorkflowStatus,
    WorkflowType,
)
from sopflow.domain.exceptions import (
    AuthenticationException,
    BusinessRuleException,
    ConfigurationException,
    CyclicDependencyException,
    DanglingDependencyException,
    DependencyNotSatisfiedException,
    EmptyInstantiationException,
    EvidenceRequiredException,
    IncompleteTasksException,
    InvalidTransitionException,
    ResourceNotFoundException,
    SopflowException,
    TemplateIntegrityException,
    UnauthorizedException,
    UnsupportedVariantException,
    ValidationException,
    WorkflowNotActiveException,
    WorkflowVersionConflictException,
)
from sopflow.domain.value_objects import Evidence, TaskKey

__all__ = [
    # Entities
    "SOPTemplateEntity",
    "TaskEntity",
    "TaskTemplateEntity",
    "WorkflowEntity",
    # Enums
    "BusinessVariant",
    "Capability",
    "EvidenceKind",
    "Priority",
    "TaskAction",
    "TaskCategory",
    "TaskStatus",
    "WorkflowAction",
    "WorkflowStatus",
    "WorkflowType",
    # Exceptions
    "AuthenticationException",
    "BusinessRuleException",
    "ConfigurationException",
    "CyclicDependencyException",
    "DanglingDependencyException",
    "DependencyNotSatisfiedException",
    "EmptyInstantiationException",
    "EvidenceRequiredException",
    "IncompleteTasksException",
    "InvalidTransitionException",
    "ResourceNotFoundException",
    "SopflowException",
    "TemplateIntegrityException",
    "UnauthorizedException",
    "UnsupportedVariantException",
    "ValidationException",
    "WorkflowNotActiveException",
    "WorkflowVersionConflictException",
    # Value objects
    "Evidence",
    "TaskKey",
]
