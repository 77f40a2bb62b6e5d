"""Publish-time validation of SOP templates.

Checks authoring rules (non-empty task list, unique well-formed keys,
positive estimates, variant coverage) and then the dependency graph.
Publishing is the only place templates are validated as user input; the
workflow factory re-checks the graph as an integrity guard.
"""

from sopflow.application.services.dependency_validator import DependencyGraphValidator
from sopflow.domain.entities import SOPTemplateEntity
from sopflow.domain.exceptions import ValidationException
from sopflow.domain.value_objects import TaskKey


class TemplateValidator:
    """Validates a template before it is stored."""

    def __init__(self, graph_validator: DependencyGraphValidator | None = None) -> None:
        self.graph_validator = graph_validator or DependencyGraphValidator()

    def validate(self, template: SOPTemplateEntity) -> None:
        """Raise ValidationException or a dependency ConfigurationException on failure."""
        if not template.name or not template.name.strip():
            raise ValidationException("Template name is required", field="name")
        if not template.tasks:
            raise ValidationException("Template must contain at least one task", field="tasks")
        if not template.applicable_variants:
            raise ValidationException(
                "Template must apply to at least one business variant",
                field="applicable_variants",
            )

        seen: set[str] = set()
        for task in template.tasks:
            try:
                TaskKey(task.key)
            except ValueError as e:
                raise ValidationException(f"Task '{task.key}': {e}", field="key") from e
            if task.key in seen:
                raise ValidationException(f"Duplicate task key '{task.key}'", field="key")
            seen.add(task.key)
            if task.estimated_minutes <= 0:
                raise ValidationException(
                    f"Task '{task.key}' estimated minutes must be positive",
                    field="estimated_minutes",
                )
            if not task.applicable_variants:
                raise ValidationException(
                    f"Task '{task.key}' must apply to at least one business variant",
                    field="applicable_variants",
                )
            extra = task.applicable_variants - template.applicable_variants
            if extra:
                raise ValidationException(
                    f"Task '{task.key}' applies to variants the template does not support: "
                    f"{', '.join(sorted(v.value for v in extra))}",
                    field="applicable_variants",
                )

        self.graph_validator.validate(template.tasks)
