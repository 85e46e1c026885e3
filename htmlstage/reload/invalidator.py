"""Decide whether a file change forces a full page reload."""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.models import ReloadChannel, ReloadDecision
from ..core.paths import canonical_file_path
from ..rendering.partials import PartialRegistry

logger = logging.getLogger(__name__)

FULL_RELOAD = {"type": "full-reload"}


class HotReloadInvalidator:
    """Map file-change events to a reload decision.

    Any change to a registered partial forces a full reload: a partial may be
    included by any number of pages.
    """

    def __init__(self, registry: PartialRegistry, enabled: bool = True):
        self.registry = registry
        self.enabled = enabled

    def decide(self, file: str | Path) -> ReloadDecision:
        if self.enabled and canonical_file_path(file) in self.registry:
            return ReloadDecision.TRIGGERS_RELOAD
        return ReloadDecision.IGNORED

    def handle(self, file: str | Path, channel: ReloadChannel) -> ReloadDecision:
        """Decide on a change and signal a full reload through ``channel`` if needed."""
        decision = self.decide(file)
        if decision is ReloadDecision.TRIGGERS_RELOAD:
            logger.debug(f"Partial changed, requesting full reload: {file}")
            channel.send(dict(FULL_RELOAD))
        return decision
