"""SOP template domain entities.

An SOP template is a reusable, ordered checklist definition. Each task
template names the business variants it applies to and the keys of the
other tasks (same template) it depends on.
"""

from dataclasses import dataclass, field

from sopflow.domain.enums import (
    BusinessVariant,
    EvidenceKind,
    TaskCategory,
    WorkflowType,
)


@dataclass(frozen=True)
class TaskTemplateEntity:
    """Domain entity for one task definition inside an SOP template."""

    key: str
    title: str
    instructions: str
    category: TaskCategory
    evidence_kind: EvidenceKind
    estimated_minutes: int
    is_required: bool
    requires_owner_approval: bool
    applicable_variants: frozenset[BusinessVariant]
    depends_on: tuple[str, ...] = ()

    def supports(self, variant: BusinessVariant) -> bool:
        """Return whether the variant is listed for this task."""
        return variant in self.applicable_variants


@dataclass(frozen=True)
class SOPTemplateEntity:
    """Domain entity for an SOP template (ordered task templates).

    Immutable after publication; edits produce a new template.
    """

    id: str
    name: str
    description: str
    workflow_type: WorkflowType
    applicable_variants: frozenset[BusinessVariant]
    tasks: tuple[TaskTemplateEntity, ...] = field(default_factory=tuple)

    def supports(self, variant: BusinessVariant) -> bool:
        """Return whether the template can be instantiated for the variant."""
        return variant in self.applicable_variants

    def task_keys(self) -> list[str]:
        """Return task keys in template order."""
        return [t.key for t in self.tasks]
