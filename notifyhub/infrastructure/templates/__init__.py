"""Template rendering and template storage."""

from .renderer import JinjaTemplateRenderer, format_date, template_context
from .repository import FileSystemTemplateRepository, InMemoryTemplateRepository

__all__ = [
    "JinjaTemplateRenderer",
    "format_date",
    "template_context",
    "FileSystemTemplateRepository",
    "InMemoryTemplateRepository",
]
