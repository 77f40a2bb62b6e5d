"""Actor context passed into every mutating operation.

The core never authenticates; callers build an ActorContext from their
session (e.g. JWT claims) and the authorization gate consults it.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ActorContext:
    """Immutable snapshot of who is performing an action.

    Attributes:
        actor_id: Authenticated user id.
        role: Optional role code (e.g. 'admin', 'team', 'client').
        capabilities: Capability codes granted explicitly, on top of the role.
    """

    actor_id: str
    role: str | None = None
    capabilities: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.actor_id:
            raise ValueError("actor_id is required")
