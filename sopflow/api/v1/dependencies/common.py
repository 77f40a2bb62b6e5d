"""Shared providers: repositories per backend, authorization, locks, factory."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from sopflow.application.interfaces.repositories import (
    ITemplateRepository,
    IWorkflowRepository,
)
from sopflow.application.interfaces.services import IWorkflowLockRegistry
from sopflow.application.services import (
    AuthorizationService,
    VariantClassifier,
    WorkflowFactory,
)
from sopflow.core.config import get_settings
from sopflow.infrastructure.persistence.database import get_db_transactional_or_none
from sopflow.infrastructure.persistence.repositories import (
    SqlTemplateRepository,
    SqlWorkflowRepository,
)

SessionOrNone = Annotated[AsyncSession | None, Depends(get_db_transactional_or_none)]


def get_template_repo(request: Request, db: SessionOrNone) -> ITemplateRepository:
    """In-memory store from app.state, or a SQL repository bound to this request's transaction."""
    if db is None:
        return request.app.state.template_repo
    return SqlTemplateRepository(db)


def get_workflow_repo(request: Request, db: SessionOrNone) -> IWorkflowRepository:
    if db is None:
        return request.app.state.workflow_repo
    return SqlWorkflowRepository(db)


def get_authorization_service(request: Request) -> AuthorizationService:
    return AuthorizationService(request.app.state.permission_resolver)


def get_workflow_locks(request: Request) -> IWorkflowLockRegistry:
    return request.app.state.workflow_locks


def get_workflow_factory() -> WorkflowFactory:
    """Factory configured from settings (due-date defaults, variant exclusions)."""
    settings = get_settings()
    classifier = VariantClassifier() if settings.enforce_variant_exclusions else VariantClassifier({})
    return WorkflowFactory(
        classifier,
        default_due_days=settings.default_due_days,
        suspension_recovery_due_days=settings.suspension_recovery_due_days,
    )


TemplateRepo = Annotated[ITemplateRepository, Depends(get_template_repo)]
WorkflowRepo = Annotated[IWorkflowRepository, Depends(get_workflow_repo)]
Authz = Annotated[AuthorizationService, Depends(get_authorization_service)]
Locks = Annotated[IWorkflowLockRegistry, Depends(get_workflow_locks)]
