"""Application DTOs (frozen read models and command inputs)."""

from sopflow.application.dtos.workflow import (
    CategoryProgress,
    CompletionSummary,
    EvidenceResult,
    TaskSnapshot,
    WorkflowCreate,
    WorkflowSnapshot,
    WorkflowUpdate,
)

__all__ = [
    "CategoryProgress",
    "CompletionSummary",
    "EvidenceResult",
    "TaskSnapshot",
    "WorkflowCreate",
    "WorkflowSnapshot",
    "WorkflowUpdate",
]
