"""Hot-reload invalidation."""

from .invalidator import FULL_RELOAD, HotReloadInvalidator

__all__ = ["FULL_RELOAD", "HotReloadInvalidator"]
