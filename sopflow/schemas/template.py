"""SOP template API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from sopflow.domain.entities import SOPTemplateEntity, TaskTemplateEntity
from sopflow.domain.enums import BusinessVariant, EvidenceKind, TaskCategory, WorkflowType


class TaskTemplateSchema(BaseModel):
    """Task definition (request and response)."""

    model_config = ConfigDict(from_attributes=True)

    key: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1, max_length=500)
    instructions: str = ""
    category: TaskCategory
    evidence_kind: EvidenceKind = EvidenceKind.NONE
    estimated_minutes: int = Field(..., gt=0)
    is_required: bool = True
    requires_owner_approval: bool = False
    applicable_variants: list[BusinessVariant] = Field(..., min_length=1)
    depends_on: list[str] = Field(default_factory=list)

    def to_entity(self) -> TaskTemplateEntity:
        return TaskTemplateEntity(
            key=self.key,
            title=self.title,
            instructions=self.instructions,
            category=self.category,
            evidence_kind=self.evidence_kind,
            estimated_minutes=self.estimated_minutes,
            is_required=self.is_required,
            requires_owner_approval=self.requires_owner_approval,
            applicable_variants=frozenset(self.applicable_variants),
            depends_on=tuple(self.depends_on),
        )


class TemplateCreateRequest(BaseModel):
    """Request body for publishing a template. id is generated when omitted."""

    id: str | None = Field(default=None, min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    workflow_type: WorkflowType
    applicable_variants: list[BusinessVariant] = Field(..., min_length=1)
    tasks: list[TaskTemplateSchema] = Field(..., min_length=1)

    def to_entity(self) -> SOPTemplateEntity:
        return SOPTemplateEntity(
            id=self.id or "",
            name=self.name,
            description=self.description,
            workflow_type=self.workflow_type,
            applicable_variants=frozenset(self.applicable_variants),
            tasks=tuple(t.to_entity() for t in self.tasks),
        )


class TemplateResponse(BaseModel):
    """Published template."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    workflow_type: WorkflowType
    applicable_variants: list[BusinessVariant]
    tasks: list[TaskTemplateSchema]

    @classmethod
    def from_entity(cls, template: SOPTemplateEntity) -> "TemplateResponse":
        return cls(
            id=template.id,
            name=template.name,
            description=template.description,
            workflow_type=template.workflow_type,
            applicable_variants=sorted(template.applicable_variants, key=lambda v: v.value),
            tasks=[
                TaskTemplateSchema(
                    key=t.key,
                    title=t.title,
                    instructions=t.instructions,
                    category=t.category,
                    evidence_kind=t.evidence_kind,
                    estimated_minutes=t.estimated_minutes,
                    is_required=t.is_required,
                    requires_owner_approval=t.requires_owner_approval,
                    applicable_variants=sorted(
                        t.applicable_variants, key=lambda v: v.value
                    ),
                    depends_on=list(t.depends_on),
                )
                for t in template.tasks
            ],
        )


class TemplateSummaryResponse(BaseModel):
    """Template list item."""

    id: str
    name: str
    workflow_type: WorkflowType
    applicable_variants: list[BusinessVariant]
    task_count: int

    @classmethod
    def from_entity(cls, template: SOPTemplateEntity) -> "TemplateSummaryResponse":
        return cls(
            id=template.id,
            name=template.name,
            workflow_type=template.workflow_type,
            applicable_variants=sorted(template.applicable_variants, key=lambda v: v.value),
            task_count=len(template.tasks),
        )
