"""Tests for template use cases (list, get, publish)."""

import pytest

from sopflow.application.use_cases.templates import (
    GetTemplateUseCase,
    ListTemplatesUseCase,
    PublishTemplateUseCase,
)
from sopflow.domain.exceptions import (
    DanglingDependencyException,
    ResourceNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from sopflow.infrastructure.memory import InMemoryTemplateRepository


@pytest.fixture
def repo() -> InMemoryTemplateRepository:
    return InMemoryTemplateRepository()


@pytest.fixture
def publish(repo, authz) -> PublishTemplateUseCase:
    return PublishTemplateUseCase(repo, authz)


async def test_publish_then_get(publish, repo, authz, admin, make_template, make_task_template):
    template = make_template([make_task_template("a")], template_id="custom-1")
    published = await publish.execute(admin, template)
    assert published.id == "custom-1"
    assert await GetTemplateUseCase(repo, authz).execute(admin, "custom-1") == template
    assert [t.id for t in await ListTemplatesUseCase(repo, authz).execute(admin)] == ["custom-1"]


async def test_publish_generates_missing_id(publish, admin, make_template, make_task_template):
    published = await publish.execute(
        admin, make_template([make_task_template("a")], template_id="")
    )
    assert published.id


async def test_publish_duplicate_id(publish, admin, make_template, make_task_template):
    template = make_template([make_task_template("a")])
    await publish.execute(admin, template)
    with pytest.raises(ValidationException) as exc_info:
        await publish.execute(admin, template)
    assert exc_info.value.details["field"] == "id"


async def test_publish_rejects_dangling_dependency(
    publish, repo, admin, make_template, make_task_template
):
    template = make_template([make_task_template("a", depends_on=("ghost",))])
    with pytest.raises(DanglingDependencyException):
        await publish.execute(admin, template)
    assert await repo.list_all() == []


async def test_publish_requires_capability(publish, team_member, make_template, make_task_template):
    with pytest.raises(UnauthorizedException):
        await publish.execute(team_member, make_template([make_task_template("a")]))


async def test_get_unknown_template(repo, authz, team_member):
    with pytest.raises(ResourceNotFoundException):
        await GetTemplateUseCase(repo, authz).execute(team_member, "nope")
