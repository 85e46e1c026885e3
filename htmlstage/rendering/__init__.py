"""Partial registration and template rendering."""

from .engine import ROOT_HELPER, TemplateRenderer, create_environment
from .io import atomic_write_text, read_text
from .partials import PartialRegistry, iter_partial_files, partial_name

__all__ = [
    "PartialRegistry",
    "ROOT_HELPER",
    "TemplateRenderer",
    "atomic_write_text",
    "create_environment",
    "iter_partial_files",
    "partial_name",
    "read_text",
]
