"""Workflow and workflow task ORM models.

workflow.version is the optimistic-concurrency counter; tasks are keyed by
(workflow_id, id) where id is the positional task id (task-001, ...).
"""

from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sopflow.infrastructure.persistence.database import Base
from sopflow.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
)


class Workflow(CuidMixin, TimestampMixin, VersionedMixin, Base):
    """Instantiated SOP workflow for one target. Table: workflow."""

    __tablename__ = "workflow"

    template_id: Mapped[str] = mapped_column(
        String, ForeignKey("sop_template.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    template_name: Mapped[str] = mapped_column(String(255), nullable=False)
    workflow_type: Mapped[str] = mapped_column(String(32), nullable=False)
    target_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    variant: Mapped[str] = mapped_column(String(16), nullable=False)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="not_started", index=True
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    tasks: Mapped[list["WorkflowTask"]] = relationship(
        back_populates="workflow",
        cascade="all, delete-orphan",
        order_by="WorkflowTask.position",
        lazy="selectin",
    )

    __table_args__ = (Index("ix_workflow_target_status", "target_id", "status"),)


class WorkflowTask(Base):
    """Task owned by a workflow; snapshot of its template task plus mutable state."""

    __tablename__ = "workflow_task"

    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), primary_key=True
    )
    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    template_key: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    evidence_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    estimated_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False)
    requires_owner_approval: Mapped[bool] = mapped_column(Boolean, nullable=False)
    depends_on: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    assignee_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    evidence_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    evidence_recorded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    workflow: Mapped[Workflow] = relationship(back_populates="tasks")
