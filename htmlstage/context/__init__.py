"""Settings loading and context resolution."""

from .loader import DeferredSettings, SettingsLoader, parse_settings
from .resolver import identity_strategy, resolve_context

__all__ = [
    "DeferredSettings",
    "SettingsLoader",
    "identity_strategy",
    "parse_settings",
    "resolve_context",
]
