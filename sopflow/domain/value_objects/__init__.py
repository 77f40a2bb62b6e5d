"""Domain value objects and shared value types."""

from sopflow.domain.value_objects.core import Evidence, TaskKey

__all__ = [
    "Evidence",
    "TaskKey",
]
