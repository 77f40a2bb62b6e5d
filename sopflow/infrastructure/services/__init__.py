"""Infrastructure services: permission resolver, per-workflow locks."""

from sopflow.infrastructure.services.permission_resolver import (
    ROLE_CAPABILITIES,
    RolePermissionResolver,
)
from sopflow.infrastructure.services.workflow_locks import WorkflowLockRegistry

__all__ = [
    "ROLE_CAPABILITIES",
    "RolePermissionResolver",
    "WorkflowLockRegistry",
]
