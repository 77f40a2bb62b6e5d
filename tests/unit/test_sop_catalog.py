"""Tests for the built-in SOP templates."""

import pytest

from sopflow.application.services import TemplateValidator, WorkflowFactory
from sopflow.domain.enums import BusinessVariant, TaskCategory
from sopflow.infrastructure.catalog import BUILTIN_TEMPLATES, seed_builtin_templates
from sopflow.infrastructure.memory import InMemoryTemplateRepository


@pytest.mark.parametrize("template", BUILTIN_TEMPLATES, ids=lambda t: t.id)
def test_builtin_templates_are_valid(template) -> None:
    TemplateValidator().validate(template)


@pytest.mark.parametrize("template", BUILTIN_TEMPLATES, ids=lambda t: t.id)
@pytest.mark.parametrize("variant", list(BusinessVariant))
def test_builtin_templates_instantiate_for_supported_variants(template, variant) -> None:
    if not template.supports(variant):
        pytest.skip(f"{template.id} does not support {variant.value}")
    workflow = WorkflowFactory().instantiate(template, "loc-1", variant)
    ids = {t.id for t in workflow.tasks}
    assert workflow.tasks
    assert all(dep in ids for t in workflow.tasks for dep in t.depends_on)


def test_rank_rent_rebrand_is_not_offered() -> None:
    rebrand = next(t for t in BUILTIN_TEMPLATES if t.id == "sop-rebrand")
    assert not rebrand.supports(BusinessVariant.RANK_RENT)


def test_new_location_rank_rent_has_no_owner_tasks() -> None:
    template = next(t for t in BUILTIN_TEMPLATES if t.id == "sop-new-location")
    workflow = WorkflowFactory().instantiate(template, "loc-1", BusinessVariant.RANK_RENT)
    assert not any(t.requires_owner_approval for t in workflow.tasks)
    assert "initial-reviews" not in {t.template_key for t in workflow.tasks}


def test_gbp_only_drops_website_tasks() -> None:
    for template in BUILTIN_TEMPLATES:
        if template.supports(BusinessVariant.GBP_ONLY):
            workflow = WorkflowFactory().instantiate(template, "loc-1", BusinessVariant.GBP_ONLY)
            assert all(t.category != TaskCategory.WEBSITE for t in workflow.tasks)


async def test_seed_is_idempotent() -> None:
    repo = InMemoryTemplateRepository()
    assert await seed_builtin_templates(repo) == len(BUILTIN_TEMPLATES)
    assert await seed_builtin_templates(repo) == 0
    assert len(await repo.list_all()) == len(BUILTIN_TEMPLATES)
