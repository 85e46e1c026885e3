"""htmlstage - Build-time HTML templating stage.

Renders pages through Jinja2 against a settings document and per-page
context, with partial discovery and hot-reload invalidation.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.errors import HtmlStageError, PartialDirectoryError, SettingsFallbackError
from .core.models import (
    CompileOptions,
    HotUpdateContext,
    PluginConfig,
    ReloadDecision,
    RuntimeOptions,
    TransformContext,
)
from .plugin import HtmlStagePlugin, htmlstage

# Re-export main CLI entry point
from .cli import main

__all__ = [
    "CompileOptions",
    "HotUpdateContext",
    "HtmlStageError",
    "HtmlStagePlugin",
    "PartialDirectoryError",
    "PluginConfig",
    "ReloadDecision",
    "RuntimeOptions",
    "SettingsFallbackError",
    "TransformContext",
    "htmlstage",
    "main",
]
