"""Exceptions raised by the templating stage."""

from __future__ import annotations


class HtmlStageError(Exception):
    """Base class for errors raised by htmlstage itself."""


class PartialDirectoryError(HtmlStageError, ValueError):
    """Raised when a partial directory does not resolve to a real directory."""


class SettingsFallbackError(HtmlStageError, LookupError):
    """Raised when the settings fallback is needed but no cached copy exists."""
