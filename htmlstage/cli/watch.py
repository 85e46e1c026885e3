"""Polling file watcher that feeds changes to the plugin's hot update hook."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..core.models import HotUpdateContext
from ..core.paths import canonical_file_path
from ..plugin import HtmlStagePlugin

logger = logging.getLogger(__name__)

Snapshot = dict[str, float]


def snapshot(paths: Iterable[Path]) -> Snapshot:
    """Record modification times of the given files and of every file under the given directories."""
    mtimes: Snapshot = {}
    for path in paths:
        if path.is_dir():
            files = (p for p in path.rglob("*") if p.is_file())
        elif path.is_file():
            files = iter([path])
        else:
            continue
        for file in files:
            try:
                mtimes[canonical_file_path(file)] = file.stat().st_mtime
            except FileNotFoundError:
                continue
    return mtimes


def changed_files(before: Snapshot, after: Snapshot) -> list[str]:
    """Return files added, removed or modified between two snapshots."""
    changed = {path for path, mtime in after.items() if before.get(path) != mtime}
    changed.update(path for path in before if path not in after)
    return sorted(changed)


class RebuildChannel:
    """Reload channel for a build on disk: a full reload means rebuild every page."""

    def __init__(self) -> None:
        self.full_reload = False

    def send(self, payload: dict[str, Any]) -> None:
        if payload.get("type") == "full-reload":
            logger.info("Partial changed, rebuilding all pages")
            self.full_reload = True


def plan_rebuild(
    plugin: HtmlStagePlugin,
    changes: Iterable[str],
    pages: Iterable[Path],
) -> tuple[bool, list[Path]]:
    """Route file changes through the plugin and decide what to re-render.

    Args:
        plugin: Configured plugin
        changes: Canonical paths of changed files
        pages: Pages currently known to the build

    Returns:
        (rebuild everything, pages to re-render when not rebuilding everything)
    """
    channel = RebuildChannel()
    settings_file = canonical_file_path(plugin.config.settings_file)
    page_index = {canonical_file_path(page): page for page in pages}

    rebuild_all = False
    dirty: list[Path] = []
    for change in changes:
        handled = plugin.handle_hot_update(HotUpdateContext(file=change, server=channel))
        if handled is not None:
            continue
        if change == settings_file:
            rebuild_all = True
        elif change in page_index:
            dirty.append(page_index[change])

    return rebuild_all or channel.full_reload, dirty
