"""SOP template ORM models. Templates are insert-only once published."""

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sopflow.infrastructure.persistence.database import Base
from sopflow.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class SopTemplate(CuidMixin, TimestampMixin, Base):
    """Published SOP template. Table: sop_template."""

    __tablename__ = "sop_template"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    workflow_type: Mapped[str] = mapped_column(String(32), nullable=False)
    applicable_variants: Mapped[list[str]] = mapped_column(JSON, nullable=False)

    tasks: Mapped[list["TaskTemplate"]] = relationship(
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TaskTemplate.position",
        lazy="selectin",
    )


class TaskTemplate(Base):
    """Task definition within a template, keyed by (template_id, key). Table: task_template."""

    __tablename__ = "task_template"

    template_id: Mapped[str] = mapped_column(
        String, ForeignKey("sop_template.id", ondelete="CASCADE"), primary_key=True
    )
    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    evidence_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    estimated_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    requires_owner_approval: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    applicable_variants: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    depends_on: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    template: Mapped[SopTemplate] = relationship(back_populates="tasks")
