"""Business variant classifier: decides whether a template task applies to a variant.

Pure lookup. A task applies when the variant is in its applicable set and no
exclusion rule for that variant rejects it. Exclusion rules encode what a
kind of target structurally lacks (a gbp_only listing has no website; a
rank_rent site has no reachable owner to approve anything).
"""

from collections.abc import Callable, Iterable, Mapping

from sopflow.domain.entities import TaskTemplateEntity
from sopflow.domain.enums import BusinessVariant, TaskCategory

ExclusionRule = Callable[[TaskTemplateEntity], bool]


def _is_website_task(task: TaskTemplateEntity) -> bool:
    return task.category == TaskCategory.WEBSITE


def _needs_owner(task: TaskTemplateEntity) -> bool:
    return task.requires_owner_approval


DEFAULT_EXCLUSIONS: Mapping[BusinessVariant, tuple[tuple[str, ExclusionRule], ...]] = {
    BusinessVariant.GBP_ONLY: (("no_website", _is_website_task),),
    BusinessVariant.RANK_RENT: (("no_owner_approval", _needs_owner),),
}


class VariantClassifier:
    """Filters template tasks by business variant.

    Build with exclusions={} for plain set-membership behavior.
    """

    def __init__(
        self,
        exclusions: Mapping[
            BusinessVariant, tuple[tuple[str, ExclusionRule], ...]
        ] = DEFAULT_EXCLUSIONS,
    ) -> None:
        self._exclusions = exclusions

    def excluded_by(
        self, task: TaskTemplateEntity, variant: BusinessVariant
    ) -> str | None:
        """Return the name of the first exclusion rule rejecting the task, or None."""
        for name, rule in self._exclusions.get(variant, ()):
            if rule(task):
                return name
        return None

    def applies(self, task: TaskTemplateEntity, variant: BusinessVariant) -> bool:
        """Return True if the task is part of a workflow for this variant."""
        if not task.supports(variant):
            return False
        return self.excluded_by(task, variant) is None

    def filter(
        self, tasks: Iterable[TaskTemplateEntity], variant: BusinessVariant
    ) -> list[TaskTemplateEntity]:
        """Return applicable tasks, preserving order."""
        return [t for t in tasks if self.applies(t, variant)]
