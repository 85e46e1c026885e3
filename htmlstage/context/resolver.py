"""Per-page context resolution."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..core.models import ContextStrategy
from .loader import DeferredSettings

logger = logging.getLogger(__name__)


def identity_strategy(settings: Any, page_path: str) -> Any:
    """Use the settings value as the context, unchanged."""
    return settings


def _resolve_page_values(context: Mapping[str, Any], page_path: str) -> Mapping[str, Any]:
    if not any(callable(value) for value in context.values()):
        return context
    return {
        key: value(page_path) if callable(value) else value
        for key, value in context.items()
    }


def resolve_context(
    settings: Any, page_path: str, strategy: ContextStrategy | None = None
) -> Any:
    """Build the object a page is rendered against.

    A deferred settings fallback is resolved here, the first time settings
    content is actually needed.

    Args:
        settings: Parsed settings or a DeferredSettings fallback
        page_path: Normalized output path of the page
        strategy: Callable (settings, page_path) -> context; identity if None

    Returns:
        Resolved context. Callable values of a mapping context are replaced
        by their result for ``page_path``.
    """
    if isinstance(settings, DeferredSettings):
        settings = settings.resolve()

    context = (strategy or identity_strategy)(settings, page_path)
    if isinstance(context, Mapping):
        context = _resolve_page_values(context, page_path)

    logger.debug(f"Resolved context for {page_path}")
    return context
