"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from sopflow.domain.entities.sop_template import SOPTemplateEntity, TaskTemplateEntity
from sopflow.domain.entities.workflow import TaskEntity, WorkflowEntity

__all__ = [
    "SOPTemplateEntity",
    "TaskEntity",
    "TaskTemplateEntity",
    "WorkflowEntity",
]
