"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: permission resolver, per-workflow
lock registry, in-memory stores (memory backend), built-in template seeding
and SQL engine dispose. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from sopflow.core.config import get_settings
from sopflow.infrastructure.catalog import seed_builtin_templates
from sopflow.infrastructure.memory import (
    InMemoryTemplateRepository,
    InMemoryWorkflowRepository,
)
from sopflow.infrastructure.persistence import database
from sopflow.infrastructure.services import RolePermissionResolver, WorkflowLockRegistry

logger = logging.getLogger(__name__)


async def _seed_sql_templates() -> None:
    from sopflow.infrastructure.persistence.repositories import SqlTemplateRepository

    async for session in database.get_db_transactional():
        await seed_builtin_templates(SqlTemplateRepository(session))


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown."""
    settings = get_settings()

    # ---- Startup ----
    app.state.permission_resolver = RolePermissionResolver()
    app.state.workflow_locks = WorkflowLockRegistry()

    if settings.database_backend == "memory":
        app.state.template_repo = InMemoryTemplateRepository()
        app.state.workflow_repo = InMemoryWorkflowRepository()
        if settings.seed_builtin_templates:
            await seed_builtin_templates(app.state.template_repo)
    else:
        app.state.template_repo = None
        app.state.workflow_repo = None
        if settings.seed_builtin_templates:
            await _seed_sql_templates()
    logger.info(
        "%s %s started (backend=%s)",
        settings.app_name,
        settings.app_version,
        settings.database_backend,
    )

    yield

    # ---- Shutdown ----
    await database.dispose_engine()
