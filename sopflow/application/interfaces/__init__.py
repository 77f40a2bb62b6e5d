"""Ports (Protocols) implemented by infrastructure."""

from sopflow.application.interfaces.repositories import (
    ITemplateRepository,
    IWorkflowRepository,
)
from sopflow.application.interfaces.services import (
    IPermissionResolver,
    IWorkflowLockRegistry,
)

__all__ = [
    "IPermissionResolver",
    "ITemplateRepository",
    "IWorkflowLockRegistry",
    "IWorkflowRepository",
]
