"""Template use case providers (composition root)."""

from __future__ import annotations

from sopflow.api.v1.dependencies.common import Authz, TemplateRepo
from sopflow.application.use_cases.templates import (
    GetTemplateUseCase,
    ListTemplatesUseCase,
    PublishTemplateUseCase,
)


def get_list_templates_use_case(repo: TemplateRepo, authz: Authz) -> ListTemplatesUseCase:
    return ListTemplatesUseCase(repo, authz)


def get_get_template_use_case(repo: TemplateRepo, authz: Authz) -> GetTemplateUseCase:
    return GetTemplateUseCase(repo, authz)


def get_publish_template_use_case(
    repo: TemplateRepo, authz: Authz
) -> PublishTemplateUseCase:
    return PublishTemplateUseCase(repo, authz)
