"""Domain exceptions for sopflow.

Defines domain-level exceptions for configuration errors, authorization
failures, business-rule rejections and missing resources. These exceptions
are independent of infrastructure concerns. Presentation layer maps them to
HTTP responses in exception handlers.
"""

from typing import Any


class SopflowException(Exception):
    """Base exception for all sopflow errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. current status, task ids).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API error handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(SopflowException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(SopflowException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'workflow', 'template').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


# ---------------------------------------------------------------------------
# Authentication / authorization
# ---------------------------------------------------------------------------


class AuthenticationException(SopflowException):
    """Raised when the caller could not be identified (missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class UnauthorizedException(SopflowException):
    """Raised when the actor lacks the capability for an action.

    Terminal for the request; never retried by the core.
    """

    def __init__(
        self,
        capability: str,
        actor_id: str | None = None,
    ) -> None:
        """Initialize with the refused capability.

        Args:
            capability: Capability code that was refused (e.g. 'task:complete').
            actor_id: Optional id of the actor that was refused.
        """
        details: dict[str, Any] = {"capability": capability}
        if actor_id:
            details["actor_id"] = actor_id
        super().__init__(f"Not allowed: {capability}", "UNAUTHORIZED", details)


# ---------------------------------------------------------------------------
# Configuration errors (template authoring time)
# ---------------------------------------------------------------------------


class ConfigurationException(SopflowException):
    """Base for template configuration errors surfaced to the template author."""


class CyclicDependencyException(ConfigurationException):
    """Raised when task dependencies within a template form a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        """Initialize with the cycle path.

        Args:
            cycle: Task keys along the cycle; the first key is repeated at the end.
        """
        super().__init__(
            f"Cyclic task dependency: {' -> '.join(cycle)}",
            "CYCLIC_DEPENDENCY",
            {"cycle": cycle},
        )


class DanglingDependencyException(ConfigurationException):
    """Raised when a task depends on a key that is not in the same template."""

    def __init__(self, task_key: str, missing_key: str) -> None:
        super().__init__(
            f"Task '{task_key}' depends on unknown task '{missing_key}'",
            "DANGLING_DEPENDENCY",
            {"task_key": task_key, "missing_key": missing_key},
        )


class UnsupportedVariantException(ConfigurationException):
    """Raised when instantiating a template for a variant it does not support."""

    def __init__(
        self,
        template_id: str,
        variant: str,
        supported_variants: list[str],
    ) -> None:
        super().__init__(
            f"Template {template_id} does not support business variant '{variant}'",
            "UNSUPPORTED_VARIANT",
            {
                "template_id": template_id,
                "variant": variant,
                "supported_variants": supported_variants,
            },
        )


class EmptyInstantiationException(ConfigurationException):
    """Raised when no template task applies to the requested variant."""

    def __init__(self, template_id: str, variant: str) -> None:
        super().__init__(
            f"Template {template_id} has no tasks applicable to '{variant}'",
            "EMPTY_INSTANTIATION",
            {"template_id": template_id, "variant": variant},
        )


class TemplateIntegrityException(ConfigurationException):
    """Raised when a stored template fails re-validation at instantiation.

    Published templates are validated once; failing again later means the
    stored configuration is corrupt. Fatal, never user-facing.
    """

    def __init__(self, template_id: str, cause: ConfigurationException) -> None:
        super().__init__(
            f"Stored template {template_id} failed validation",
            "TEMPLATE_INTEGRITY_ERROR",
            {"template_id": template_id, "cause": cause.error_code, **cause.details},
        )


# ---------------------------------------------------------------------------
# Business-rule rejections (expected, user-facing)
# ---------------------------------------------------------------------------


class BusinessRuleException(SopflowException):
    """Base for expected, user-facing rejections of a transition."""


class InvalidTransitionException(BusinessRuleException):
    """Raised when an action is not legal from the entity's current status."""

    def __init__(
        self,
        entity: str,
        entity_id: str,
        current_status: str,
        attempted: str,
    ) -> None:
        """Initialize with entity and transition context.

        Args:
            entity: 'workflow' or 'task'.
            entity_id: Id of the workflow or task.
            current_status: Status the entity is in.
            attempted: Action that was requested.
        """
        super().__init__(
            f"Cannot {attempted} {entity} {entity_id} in status '{current_status}'",
            "INVALID_TRANSITION",
            {
                "entity": entity,
                "entity_id": entity_id,
                "current_status": current_status,
                "attempted": attempted,
            },
        )


class DependencyNotSatisfiedException(BusinessRuleException):
    """Raised when a task's dependencies are not all completed or skipped."""

    def __init__(self, task_id: str, blocking_task_ids: list[str]) -> None:
        super().__init__(
            f"Task {task_id} is blocked by {', '.join(blocking_task_ids)}",
            "DEPENDENCY_NOT_SATISFIED",
            {"task_id": task_id, "blocking_task_ids": blocking_task_ids},
        )


class IncompleteTasksException(BusinessRuleException):
    """Raised when completing a workflow that still has open tasks."""

    def __init__(
        self,
        workflow_id: str,
        remaining_count: int,
        remaining_task_ids: list[str],
    ) -> None:
        super().__init__(
            f"Cannot complete workflow {workflow_id}: {remaining_count} task(s) remaining",
            "INCOMPLETE_TASKS",
            {
                "workflow_id": workflow_id,
                "remaining_count": remaining_count,
                "remaining_task_ids": remaining_task_ids,
            },
        )

    @property
    def remaining_count(self) -> int:
        return self.details["remaining_count"]


class WorkflowNotActiveException(BusinessRuleException):
    """Raised when a task transition targets a workflow that is not in progress."""

    def __init__(self, workflow_id: str, workflow_status: str) -> None:
        super().__init__(
            f"Workflow {workflow_id} is not active (status '{workflow_status}')",
            "WORKFLOW_NOT_ACTIVE",
            {"workflow_id": workflow_id, "workflow_status": workflow_status},
        )


class EvidenceRequiredException(BusinessRuleException):
    """Raised when completing a task that requires evidence without providing any."""

    def __init__(self, task_id: str, evidence_kind: str) -> None:
        super().__init__(
            f"Task {task_id} requires {evidence_kind} evidence to complete",
            "EVIDENCE_REQUIRED",
            {"task_id": task_id, "evidence_kind": evidence_kind},
        )


# ---------------------------------------------------------------------------
# Concurrency / infrastructure
# ---------------------------------------------------------------------------


class WorkflowVersionConflictException(SopflowException):
    """Raised when a concurrent request saved the workflow first (optimistic lock)."""

    def __init__(self, workflow_id: str, expected_version: int) -> None:
        super().__init__(
            "Workflow was updated by another request; retry.",
            "WORKFLOW_VERSION_CONFLICT",
            {"workflow_id": workflow_id, "expected_version": expected_version},
        )


class SqlNotConfiguredException(SopflowException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
