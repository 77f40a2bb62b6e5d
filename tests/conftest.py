"""Pytest configuration and fixtures for sopflow.

HTTP tests build a fresh app per test on the in-memory backend and run its
lifespan, so every test starts with only the built-in templates seeded.
Unit tests use the builder fixtures below. Postgres-only tests are marked
requires_db and skipped unless DATABASE_BACKEND=postgres.
"""

import os

os.environ["DATABASE_BACKEND"] = os.environ.get("SOPFLOW_TEST_BACKEND", "memory")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from sopflow.application.services import AuthorizationService, WorkflowFactory
from sopflow.core.config import get_settings
from sopflow.domain.entities import SOPTemplateEntity, TaskTemplateEntity, WorkflowEntity
from sopflow.domain.enums import (
    BusinessVariant,
    EvidenceKind,
    TaskCategory,
    WorkflowStatus,
    WorkflowType,
)
from sopflow.infrastructure.security.jwt import create_access_token
from sopflow.infrastructure.services import RolePermissionResolver
from sopflow.shared.context import ActorContext

get_settings.cache_clear()

FIXED_NOW = datetime(2025, 3, 3, 9, 0, tzinfo=UTC)
ALL_VARIANTS = frozenset(BusinessVariant)


@pytest.fixture
async def app():
    """Fresh FastAPI app with its lifespan running (stores, locks, seeded templates)."""
    from sopflow.main import create_app

    application = create_app()
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def bearer(sub: str = "user-1", role: str | None = "admin", **claims: Any) -> dict[str, str]:
    """Authorization header for a signed token with the given claims."""
    data: dict[str, Any] = {"sub": sub, **claims}
    if role is not None:
        data["role"] = role
    return {"Authorization": f"Bearer {create_access_token(data)}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer("admin-1", "admin")


@pytest.fixture
def team_headers() -> dict[str, str]:
    return bearer("team-1", "team")


@pytest.fixture
def client_headers() -> dict[str, str]:
    return bearer("client-1", "client")


@pytest.fixture
def admin() -> ActorContext:
    return ActorContext(actor_id="admin-1", role="admin")


@pytest.fixture
def team_member() -> ActorContext:
    return ActorContext(actor_id="team-1", role="team")


@pytest.fixture
def viewer() -> ActorContext:
    return ActorContext(actor_id="client-1", role="client")


@pytest.fixture
def authz() -> AuthorizationService:
    return AuthorizationService(RolePermissionResolver())


@pytest.fixture
def make_task_template() -> Callable[..., TaskTemplateEntity]:
    """Builder for task templates; defaults are a required, evidence-free task for every variant."""

    def _make(
        key: str,
        *,
        depends_on: tuple[str, ...] = (),
        variants: frozenset[BusinessVariant] = ALL_VARIANTS,
        category: TaskCategory = TaskCategory.GBP_SETUP,
        evidence_kind: EvidenceKind = EvidenceKind.NONE,
        minutes: int = 15,
        required: bool = True,
        approval: bool = False,
    ) -> TaskTemplateEntity:
        return TaskTemplateEntity(
            key=key,
            title=key.replace("-", " ").title(),
            instructions=f"Do {key}",
            category=category,
            evidence_kind=evidence_kind,
            estimated_minutes=minutes,
            is_required=required,
            requires_owner_approval=approval,
            applicable_variants=frozenset(variants),
            depends_on=tuple(depends_on),
        )

    return _make


@pytest.fixture
def make_template() -> Callable[..., SOPTemplateEntity]:
    def _make(
        tasks: list[TaskTemplateEntity],
        *,
        template_id: str = "tpl-1",
        name: str = "Test SOP",
        workflow_type: WorkflowType = WorkflowType.NEW_LOCATION,
        variants: frozenset[BusinessVariant] = ALL_VARIANTS,
    ) -> SOPTemplateEntity:
        return SOPTemplateEntity(
            id=template_id,
            name=name,
            description="",
            workflow_type=workflow_type,
            applicable_variants=frozenset(variants),
            tasks=tuple(tasks),
        )

    return _make


@pytest.fixture
def factory() -> WorkflowFactory:
    """Workflow factory with a fixed clock and sequential workflow ids."""
    counter = iter(range(1, 10_000))
    return WorkflowFactory(
        id_generator=lambda: f"wf-{next(counter)}",
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def make_workflow(
    factory: WorkflowFactory,
    make_template: Callable[..., SOPTemplateEntity],
) -> Callable[..., WorkflowEntity]:
    """Instantiate tasks into a workflow; status defaults to in_progress."""

    def _make(
        tasks: list[TaskTemplateEntity],
        *,
        variant: BusinessVariant = BusinessVariant.TRADITIONAL,
        status: WorkflowStatus = WorkflowStatus.IN_PROGRESS,
    ) -> WorkflowEntity:
        workflow = factory.instantiate(make_template(tasks), "loc-1", variant)
        workflow.status = status
        if status != WorkflowStatus.NOT_STARTED:
            workflow.started_at = FIXED_NOW
        return workflow

    return _make


@pytest.fixture
def fixed_now() -> datetime:
    """Clock value used by the factory fixture (and state machines in unit tests)."""
    return FIXED_NOW


@pytest.fixture
async def db_session():
    """Database session for repository/integration tests. Rolls back after test.

    Requires SOPFLOW_TEST_BACKEND=postgres and DATABASE_URL (schema migrated
    with `alembic upgrade head`). Skips when Postgres is not configured.
    """
    from sopflow.infrastructure.persistence import database

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set SOPFLOW_TEST_BACKEND=postgres and DATABASE_URL, "
            "then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def session_factory():
    """Session factory for tests that need separate, committed transactions."""
    from sopflow.infrastructure.persistence import database

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set SOPFLOW_TEST_BACKEND=postgres and DATABASE_URL, "
            "then run: alembic upgrade head"
        )
    return database.AsyncSessionLocal
