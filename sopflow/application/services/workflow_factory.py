"""Workflow factory: instantiate an SOP template into a workflow aggregate.

Steps: reject unsupported variant, filter tasks through the classifier,
reject an empty result, remap dependency keys onto the kept tasks (edges to
filtered-out tasks are dropped), assign positional task ids and build the
workflow in not_started with every task pending.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timedelta

from sopflow.application.services.dependency_validator import DependencyGraphValidator
from sopflow.application.services.variant_classifier import VariantClassifier
from sopflow.domain.entities import SOPTemplateEntity, TaskEntity, WorkflowEntity
from sopflow.domain.enums import (
    BusinessVariant,
    Priority,
    TaskStatus,
    WorkflowStatus,
    WorkflowType,
)
from sopflow.domain.exceptions import (
    ConfigurationException,
    EmptyInstantiationException,
    TemplateIntegrityException,
    UnsupportedVariantException,
    ValidationException,
)
from sopflow.shared.telemetry.logging import get_logger
from sopflow.shared.utils.datetime import utc_now
from sopflow.shared.utils.generators import generate_cuid, task_id_for_position

logger = get_logger(__name__)


class WorkflowFactory:
    """Builds new WorkflowEntity instances from published templates."""

    def __init__(
        self,
        classifier: VariantClassifier | None = None,
        graph_validator: DependencyGraphValidator | None = None,
        *,
        default_due_days: int = 7,
        suspension_recovery_due_days: int = 3,
        id_generator: Callable[[], str] = generate_cuid,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.classifier = classifier or VariantClassifier()
        self.graph_validator = graph_validator or DependencyGraphValidator()
        self.default_due_days = default_due_days
        self.suspension_recovery_due_days = suspension_recovery_due_days
        self._id_generator = id_generator
        self._clock = clock

    def default_due_date(self, workflow_type: WorkflowType, now: datetime) -> date:
        """Return the due date used when the caller supplies none."""
        days = (
            self.suspension_recovery_due_days
            if workflow_type == WorkflowType.SUSPENSION_RECOVERY
            else self.default_due_days
        )
        return (now + timedelta(days=days)).date()

    def instantiate(
        self,
        template: SOPTemplateEntity,
        target_id: str,
        variant: BusinessVariant,
        priority: Priority = Priority.MEDIUM,
        due_date: date | None = None,
    ) -> WorkflowEntity:
        """Return a new workflow for target_id; nothing is persisted here.

        Raises:
            ValidationException: target_id is blank.
            UnsupportedVariantException: Template does not list the variant.
            EmptyInstantiationException: No task applies to the variant.
            TemplateIntegrityException: Stored template fails dependency re-validation.
        """
        if not target_id or not target_id.strip():
            raise ValidationException("target_id is required", field="target_id")

        if not template.supports(variant):
            raise UnsupportedVariantException(
                template.id,
                variant.value,
                sorted(v.value for v in template.applicable_variants),
            )

        try:
            self.graph_validator.validate(template.tasks)
        except ConfigurationException as e:
            logger.error(
                "Stored template %s failed dependency validation: %s",
                template.id,
                e.message,
            )
            raise TemplateIntegrityException(template.id, e) from e

        kept = self.classifier.filter(template.tasks, variant)
        if not kept:
            raise EmptyInstantiationException(template.id, variant.value)

        key_to_id = {
            t.key: task_id_for_position(position)
            for position, t in enumerate(kept, start=1)
        }
        tasks: list[TaskEntity] = []
        for position, tt in enumerate(kept, start=1):
            depends_on: list[str] = []
            for dep_key in tt.depends_on:
                dep_id = key_to_id.get(dep_key)
                if dep_id is not None and dep_id not in depends_on:
                    depends_on.append(dep_id)
            tasks.append(
                TaskEntity(
                    id=key_to_id[tt.key],
                    position=position,
                    template_key=tt.key,
                    title=tt.title,
                    instructions=tt.instructions,
                    category=tt.category,
                    evidence_kind=tt.evidence_kind,
                    estimated_minutes=tt.estimated_minutes,
                    is_required=tt.is_required,
                    requires_owner_approval=tt.requires_owner_approval,
                    depends_on=depends_on,
                    status=TaskStatus.PENDING,
                )
            )

        now = self._clock()
        workflow = WorkflowEntity(
            id=self._id_generator(),
            template_id=template.id,
            template_name=template.name,
            workflow_type=template.workflow_type,
            target_id=target_id.strip(),
            variant=variant,
            priority=priority,
            status=WorkflowStatus.NOT_STARTED,
            created_at=now,
            due_date=due_date or self.default_due_date(template.workflow_type, now),
            started_at=None,
            completed_at=None,
            tasks=tasks,
        )
        logger.info(
            "Instantiated workflow %s from template %s for %s (%s): %d of %d tasks",
            workflow.id,
            template.id,
            workflow.target_id,
            variant.value,
            len(tasks),
            len(template.tasks),
        )
        return workflow
