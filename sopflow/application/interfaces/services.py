"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sopflow.domain.enums import Capability
    from sopflow.shared.context import ActorContext


class IPermissionResolver(Protocol):
    """Protocol for the pure authorization predicate."""

    def allowed(self, actor: ActorContext, capability: Capability) -> bool:
        """Return whether the actor holds the capability. No side effects."""
        ...


class IWorkflowLockRegistry(Protocol):
    """Protocol for per-workflow mutual exclusion around load/transition/save."""

    def lock(self, workflow_id: str) -> AbstractAsyncContextManager[None]:
        """Return an async context manager serializing work on one workflow."""
        ...
