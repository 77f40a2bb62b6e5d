"""In-memory storage backend (default; process-local)."""

from sopflow.infrastructure.memory.repositories import (
    InMemoryTemplateRepository,
    InMemoryWorkflowRepository,
)

__all__ = [
    "InMemoryTemplateRepository",
    "InMemoryWorkflowRepository",
]
