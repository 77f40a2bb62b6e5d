"""Resolves actor capabilities from role plus explicit grants (implements IPermissionResolver)."""

from __future__ import annotations

from collections.abc import Mapping

from sopflow.domain.enums import Capability
from sopflow.shared.context import ActorContext

_ALL = frozenset(Capability)

ROLE_CAPABILITIES: Mapping[str, frozenset[Capability]] = {
    "super_admin": _ALL,
    "admin": _ALL,
    "team": frozenset(
        {
            Capability.TEMPLATE_VIEW,
            Capability.WORKFLOW_VIEW,
            Capability.WORKFLOW_CREATE,
            Capability.WORKFLOW_START,
            Capability.TASK_START,
            Capability.TASK_COMPLETE,
            Capability.TASK_SKIP,
        }
    ),
    "client": frozenset({Capability.WORKFLOW_VIEW}),
}


class RolePermissionResolver:
    """Pure predicate: role table lookup, then explicit codes (with resource:* and *:* wildcards)."""

    def __init__(
        self, role_capabilities: Mapping[str, frozenset[Capability]] = ROLE_CAPABILITIES
    ) -> None:
        self._role_capabilities = role_capabilities

    def capabilities_for(self, actor: ActorContext) -> set[str]:
        """Return capability codes the actor holds (wildcards left unexpanded)."""
        codes = {c.value for c in self._role_capabilities.get(actor.role or "", frozenset())}
        codes.update(actor.capabilities)
        return codes

    def allowed(self, actor: ActorContext, capability: Capability) -> bool:
        codes = self.capabilities_for(actor)
        if capability.value in codes:
            return True
        return f"{capability.resource}:*" in codes or "*:*" in codes
