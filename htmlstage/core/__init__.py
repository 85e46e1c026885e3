"""Core models, errors and path helpers."""

from .errors import HtmlStageError, PartialDirectoryError, SettingsFallbackError
from .models import (
    CompileOptions,
    ContextStrategy,
    HotUpdateContext,
    PluginConfig,
    ReloadChannel,
    ReloadDecision,
    RuntimeOptions,
    TransformContext,
)
from .paths import canonical_file_path, normalize_path

__all__ = [
    "CompileOptions",
    "ContextStrategy",
    "HotUpdateContext",
    "HtmlStageError",
    "PartialDirectoryError",
    "PluginConfig",
    "ReloadChannel",
    "ReloadDecision",
    "RuntimeOptions",
    "SettingsFallbackError",
    "TransformContext",
    "canonical_file_path",
    "normalize_path",
]
