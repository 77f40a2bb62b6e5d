"""DTOs for workflows and tasks.

Snapshots are immutable views of an aggregate at one version; derived
values (display status, counts, progress) are computed when the snapshot
is built and never stored.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from sopflow.domain.enums import (
    BusinessVariant,
    EvidenceKind,
    Priority,
    TaskCategory,
    TaskStatus,
    WorkflowStatus,
    WorkflowType,
)


@dataclass(frozen=True)
class WorkflowCreate:
    """Input for CreateWorkflow."""

    template_id: str
    target_id: str
    variant: BusinessVariant
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None


@dataclass(frozen=True)
class WorkflowUpdate:
    """Input for UpdateWorkflow. Only fields named in `fields` are applied."""

    fields: frozenset[str]
    priority: Priority | None = None
    due_date: date | None = None


@dataclass(frozen=True)
class EvidenceResult:
    kind: EvidenceKind
    value: str
    recorded_at: datetime | None


@dataclass(frozen=True)
class TaskSnapshot:
    """Task read-model. status is the display status (blocked is derived)."""

    id: str
    workflow_id: str
    position: int
    template_key: str
    title: str
    instructions: str
    category: TaskCategory
    evidence_kind: EvidenceKind
    estimated_minutes: int
    is_required: bool
    requires_owner_approval: bool
    status: TaskStatus
    depends_on: tuple[str, ...]
    blocking_task_ids: tuple[str, ...]
    assignee_id: str | None
    evidence: EvidenceResult | None
    started_at: datetime | None
    completed_at: datetime | None


@dataclass(frozen=True)
class WorkflowSnapshot:
    """Workflow read-model with derived counts and progress."""

    id: str
    template_id: str
    template_name: str
    workflow_type: WorkflowType
    target_id: str
    variant: BusinessVariant
    priority: Priority
    status: WorkflowStatus
    created_at: datetime
    due_date: date | None
    started_at: datetime | None
    completed_at: datetime | None
    version: int
    total_count: int
    completed_count: int
    skipped_count: int
    progress: int
    skipped_required_task_ids: tuple[str, ...]
    tasks: tuple[TaskSnapshot, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CategoryProgress:
    """Per-category task counts for the completion summary."""

    category: TaskCategory
    total: int
    completed: int
    skipped: int


@dataclass(frozen=True)
class CompletionSummary:
    """Completion report for a workflow (any status)."""

    workflow_id: str
    status: WorkflowStatus
    progress: int
    total_count: int
    completed_count: int
    skipped_count: int
    remaining_count: int
    skipped_required_task_ids: tuple[str, ...]
    estimated_minutes_total: int
    estimated_minutes_completed: int
    started_at: datetime | None
    completed_at: datetime | None
    by_category: tuple[CategoryProgress, ...]
