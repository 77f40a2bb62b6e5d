"""Template use cases."""

from sopflow.application.use_cases.templates.template_operations import (
    GetTemplateUseCase,
    ListTemplatesUseCase,
    PublishTemplateUseCase,
)

__all__ = [
    "GetTemplateUseCase",
    "ListTemplatesUseCase",
    "PublishTemplateUseCase",
]
