"""Canvas templating."""

from .resolver import TemplateResolver

__all__ = ["TemplateResolver"]
