"""Authorization gate: capability checks before any load or state-machine rule."""

from __future__ import annotations

from sopflow.application.interfaces.services import IPermissionResolver
from sopflow.domain.entities import TaskEntity
from sopflow.domain.enums import (
    TASK_ACTION_CAPABILITIES,
    WORKFLOW_ACTION_CAPABILITIES,
    Capability,
    TaskAction,
    WorkflowAction,
)
from sopflow.domain.exceptions import UnauthorizedException
from sopflow.shared.context import ActorContext
from sopflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class AuthorizationService:
    """Wraps the pure allowed() predicate; refusal raises UnauthorizedException."""

    def __init__(self, permission_resolver: IPermissionResolver) -> None:
        self.permission_resolver = permission_resolver

    def check(self, actor: ActorContext, capability: Capability) -> bool:
        """Return True if the actor holds the capability."""
        return self.permission_resolver.allowed(actor, capability)

    def require(self, actor: ActorContext, capability: Capability) -> None:
        """Raise UnauthorizedException if the actor lacks the capability."""
        if not self.check(actor, capability):
            logger.warning(
                "Refused %s for actor %s (role=%s)",
                capability.value,
                actor.actor_id,
                actor.role,
            )
            raise UnauthorizedException(capability.value, actor.actor_id)

    def require_workflow_action(self, actor: ActorContext, action: WorkflowAction) -> None:
        self.require(actor, WORKFLOW_ACTION_CAPABILITIES[action])

    def require_task_action(self, actor: ActorContext, action: TaskAction) -> None:
        self.require(actor, TASK_ACTION_CAPABILITIES[action])

    def require_approval(
        self, actor: ActorContext, task: TaskEntity, action: TaskAction
    ) -> None:
        """Completing an owner-approval task additionally needs task:approve."""
        if action == TaskAction.COMPLETE and task.requires_owner_approval:
            self.require(actor, Capability.TASK_APPROVE)
