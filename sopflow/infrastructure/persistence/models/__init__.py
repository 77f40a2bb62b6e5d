"""SQLAlchemy ORM models."""

from sopflow.infrastructure.persistence.models.sop_template import (
    SopTemplate,
    TaskTemplate,
)
from sopflow.infrastructure.persistence.models.workflow import Workflow, WorkflowTask

__all__ = [
    "SopTemplate",
    "TaskTemplate",
    "Workflow",
    "WorkflowTask",
]
