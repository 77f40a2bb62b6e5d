"""Domain enumerations for sopflow.

One closed enumeration per concept. Values are the single canonical,
lowercase spelling used in storage and on the wire.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class BusinessVariant(_ValuesMixin, str, Enum):
    """Kind of target (location) a workflow runs against.

    Determines which template tasks apply. Immutable once set on a target.
    """

    RANK_RENT = "rank_rent"
    TRADITIONAL = "traditional"
    GBP_ONLY = "gbp_only"


class TaskCategory(_ValuesMixin, str, Enum):
    """Operational area a task belongs to."""

    GBP_SETUP = "gbp_setup"
    GBP_OPTIMIZATION = "gbp_optimization"
    WEBSITE = "website"
    CITATIONS = "citations"
    REVIEWS = "reviews"
    TRACKING = "tracking"
    CONTENT = "content"
    VERIFICATION = "verification"
    DOCUMENTATION = "documentation"


class EvidenceKind(_ValuesMixin, str, Enum):
    """Evidence a task requires before it can be completed."""

    NONE = "none"
    URL = "url"
    SCREENSHOT = "screenshot"
    TEXT = "text"
    FILE = "file"
    CHECKLIST = "checklist"


class WorkflowType(_ValuesMixin, str, Enum):
    """Category of operational work an SOP template describes."""

    NEW_LOCATION = "new_location"
    SUSPENSION_RECOVERY = "suspension_recovery"
    REBRAND = "rebrand"
    MAINTENANCE = "maintenance"


class WorkflowStatus(_ValuesMixin, str, Enum):
    """Workflow lifecycle status."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status.

    BLOCKED is a display state derived from dependencies; it is never stored.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"
    SKIPPED = "skipped"

    @classmethod
    def terminal(cls) -> frozenset["TaskStatus"]:
        """Statuses that satisfy dependents and completion readiness."""
        return frozenset({cls.COMPLETED, cls.SKIPPED})

    @property
    def is_terminal(self) -> bool:
        return self in TaskStatus.terminal()


class Priority(_ValuesMixin, str, Enum):
    """Workflow priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class WorkflowAction(_ValuesMixin, str, Enum):
    """User-initiated workflow transitions."""

    START = "start"
    PAUSE = "pause"
    COMPLETE = "complete"
    REOPEN = "reopen"


class TaskAction(_ValuesMixin, str, Enum):
    """User-initiated task transitions."""

    START = "start"
    COMPLETE = "complete"
    SKIP = "skip"


class Capability(_ValuesMixin, str, Enum):
    """Capability codes checked by the authorization gate (resource:action)."""

    TEMPLATE_VIEW = "template:view"
    TEMPLATE_PUBLISH = "template:publish"
    WORKFLOW_VIEW = "workflow:view"
    WORKFLOW_CREATE = "workflow:create"
    WORKFLOW_START = "workflow:start"
    WORKFLOW_PAUSE = "workflow:pause"
    WORKFLOW_COMPLETE = "workflow:complete"
    WORKFLOW_REOPEN = "workflow:reopen"
    WORKFLOW_UPDATE = "workflow:update"
    TASK_START = "task:start"
    TASK_COMPLETE = "task:complete"
    TASK_SKIP = "task:skip"
    TASK_ASSIGN = "task:assign"
    TASK_APPROVE = "task:approve"

    @property
    def resource(self) -> str:
        return self.value.split(":", 1)[0]

    @property
    def action(self) -> str:
        return self.value.split(":", 1)[1]


WORKFLOW_ACTION_CAPABILITIES: dict[WorkflowAction, Capability] = {
    WorkflowAction.START: Capability.WORKFLOW_START,
    WorkflowAction.PAUSE: Capability.WORKFLOW_PAUSE,
    WorkflowAction.COMPLETE: Capability.WORKFLOW_COMPLETE,
    WorkflowAction.REOPEN: Capability.WORKFLOW_REOPEN,
}

TASK_ACTION_CAPABILITIES: dict[TaskAction, Capability] = {
    TaskAction.START: Capability.TASK_START,
    TaskAction.COMPLETE: Capability.TASK_COMPLETE,
    TaskAction.SKIP: Capability.TASK_SKIP,
}
