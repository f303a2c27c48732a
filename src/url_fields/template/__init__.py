"""Placeholder template engine."""

from .engine import PLACEHOLDER_HELP, PLACEHOLDERS, TemplateEngine, TemplateError

__all__ = ["TemplateEngine", "TemplateError", "PLACEHOLDERS", "PLACEHOLDER_HELP"]
