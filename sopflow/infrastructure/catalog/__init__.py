"""Built-in SOP template catalog."""

from sopflow.infrastructure.catalog.sop_catalog import (
    BUILTIN_TEMPLATES,
    seed_builtin_templates,
)

__all__ = ["BUILTIN_TEMPLATES", "seed_builtin_templates"]
