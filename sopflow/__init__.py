"""sopflow: SOP template instantiation and workflow/task lifecycle service."""

__version__ = "1.0.0"
