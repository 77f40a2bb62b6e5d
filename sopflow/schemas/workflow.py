"""Workflow and task API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from sopflow.domain.enums import (
    BusinessVariant,
    EvidenceKind,
    Priority,
    TaskAction,
    TaskCategory,
    TaskStatus,
    WorkflowAction,
    WorkflowStatus,
    WorkflowType,
)


class WorkflowCreateRequest(BaseModel):
    """Request body for CreateWorkflow."""

    template_id: str = Field(..., min_length=1)
    target_id: str = Field(..., min_length=1, max_length=255)
    variant: BusinessVariant
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None


class WorkflowUpdateRequest(BaseModel):
    """Partial update; send due_date: null to clear the due date."""

    model_config = ConfigDict(extra="forbid")

    priority: Priority | None = None
    due_date: date | None = None


class WorkflowTransitionRequest(BaseModel):
    action: WorkflowAction


class TaskTransitionRequest(BaseModel):
    """Task action; evidence is required to complete tasks whose evidence kind is not 'none'."""

    action: TaskAction
    evidence: str | None = Field(default=None, max_length=10_000)


class TaskAssignRequest(BaseModel):
    """Set (or clear with null) the task assignee."""

    assignee_id: str | None = Field(default=None, min_length=1, max_length=255)


class EvidenceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: EvidenceKind
    value: str
    recorded_at: datetime | None


class TaskResponse(BaseModel):
    """Task snapshot. status is the display status (blocked is derived)."""

    model_config = ConfigDict(from_attributes=True)

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
    depends_on: list[str]
    blocking_task_ids: list[str]
    assignee_id: str | None
    evidence: EvidenceResponse | None
    started_at: datetime | None
    completed_at: datetime | None


class WorkflowResponse(BaseModel):
    """Workflow snapshot with derived counts and progress."""

    model_config = ConfigDict(from_attributes=True)

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
    skipped_required_task_ids: list[str]
    tasks: list[TaskResponse]


class WorkflowListItem(BaseModel):
    """Workflow list item (no tasks)."""

    model_config = ConfigDict(from_attributes=True)

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
    total_count: int
    completed_count: int
    progress: int


class CategoryProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: TaskCategory
    total: int
    completed: int
    skipped: int


class CompletionSummaryResponse(BaseModel):
    """Completion report for a workflow."""

    model_config = ConfigDict(from_attributes=True)

    workflow_id: str
    status: WorkflowStatus
    progress: int
    total_count: int
    completed_count: int
    skipped_count: int
    remaining_count: int
    skipped_required_task_ids: list[str]
    estimated_minutes_total: int
    estimated_minutes_completed: int
    started_at: datetime | None
    completed_at: datetime | None
    by_category: list[CategoryProgressResponse]
