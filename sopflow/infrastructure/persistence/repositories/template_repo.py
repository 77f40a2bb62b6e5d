"""SOP template repository (implements ITemplateRepository). Returns domain entities."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sopflow.domain.entities import SOPTemplateEntity, TaskTemplateEntity
from sopflow.domain.enums import BusinessVariant, EvidenceKind, TaskCategory, WorkflowType
from sopflow.infrastructure.persistence.models.sop_template import SopTemplate, TaskTemplate
from sopflow.infrastructure.persistence.repositories.base import BaseRepository


def _template_to_entity(t: SopTemplate) -> SOPTemplateEntity:
    """Map SopTemplate ORM (with tasks loaded) to SOPTemplateEntity."""
    return SOPTemplateEntity(
        id=t.id,
        name=t.name,
        description=t.description,
        workflow_type=WorkflowType(t.workflow_type),
        applicable_variants=frozenset(BusinessVariant(v) for v in t.applicable_variants),
        tasks=tuple(
            TaskTemplateEntity(
                key=tt.key,
                title=tt.title,
                instructions=tt.instructions,
                category=TaskCategory(tt.category),
                evidence_kind=EvidenceKind(tt.evidence_kind),
                estimated_minutes=tt.estimated_minutes,
                is_required=tt.is_required,
                requires_owner_approval=tt.requires_owner_approval,
                applicable_variants=frozenset(
                    BusinessVariant(v) for v in tt.applicable_variants
                ),
                depends_on=tuple(tt.depends_on or ()),
            )
            for tt in t.tasks
        ),
    )


class SqlTemplateRepository(BaseRepository[SopTemplate]):
    """Template repository backed by sop_template / task_template."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, SopTemplate)

    async def get_by_id(self, template_id: str) -> SOPTemplateEntity | None:
        row = await self.get_model_by_id(template_id)
        return _template_to_entity(row) if row else None

    async def list_all(self) -> list[SOPTemplateEntity]:
        result = await self.db.execute(
            select(SopTemplate).order_by(SopTemplate.name, SopTemplate.id)
        )
        return [_template_to_entity(t) for t in result.scalars().all()]

    async def add(self, template: SOPTemplateEntity) -> SOPTemplateEntity:
        row = SopTemplate(
            id=template.id,
            name=template.name,
            description=template.description,
            workflow_type=template.workflow_type.value,
            applicable_variants=sorted(v.value for v in template.applicable_variants),
            tasks=[
                TaskTemplate(
                    key=tt.key,
                    position=position,
                    title=tt.title,
                    instructions=tt.instructions,
                    category=tt.category.value,
                    evidence_kind=tt.evidence_kind.value,
                    estimated_minutes=tt.estimated_minutes,
                    is_required=tt.is_required,
                    requires_owner_approval=tt.requires_owner_approval,
                    applicable_variants=sorted(v.value for v in tt.applicable_variants),
                    depends_on=list(tt.depends_on),
                )
                for position, tt in enumerate(template.tasks, start=1)
            ],
        )
        await self.create(row)
        return template
