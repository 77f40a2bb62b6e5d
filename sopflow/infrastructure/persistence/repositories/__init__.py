"""SQLAlchemy repositories mapping ORM rows to domain entities."""

from sopflow.infrastructure.persistence.repositories.template_repo import (
    SqlTemplateRepository,
)
from sopflow.infrastructure.persistence.repositories.workflow_repo import (
    SqlWorkflowRepository,
)

__all__ = [
    "SqlTemplateRepository",
    "SqlWorkflowRepository",
]
