"""Build-pipeline plugin that renders pages through Jinja2."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .context.loader import SettingsLoader
from .context.resolver import resolve_context
from .core.models import HotUpdateContext, PluginConfig, ReloadDecision, TransformContext
from .core.paths import normalize_path
from .reload.invalidator import HotReloadInvalidator
from .rendering.engine import TemplateRenderer
from .rendering.partials import PartialRegistry

logger = logging.getLogger(__name__)


class HtmlStagePlugin:
    """Render each page's HTML before the host bundles it.

    Hooks, in the order a host calls them:

    - ``config_resolved(root)`` once the host knows its root directory
    - ``transform_index_html(html, ctx)`` for every page
    - ``handle_hot_update(ctx)`` for every file change while serving
    """

    name = "htmlstage"
    enforce = "pre"

    def __init__(self, config: PluginConfig):
        self.config = config
        self.partials = PartialRegistry()
        self.renderer = TemplateRenderer(
            config.compile_options,
            loader=self.partials.loader,
            helpers=config.helpers,
        )
        self.settings = SettingsLoader(config.settings_file, config.cache_path())
        self.invalidator = HotReloadInvalidator(
            self.partials, enabled=config.reload_on_partial_change
        )

    @property
    def root(self) -> Path:
        return self.renderer.root

    def config_resolved(self, root: str | Path) -> None:
        """Record the build root that ``resolve_from_root`` resolves against."""
        self.renderer.root = Path(root)

    def handle_hot_update(self, ctx: HotUpdateContext) -> list[Any] | None:
        """Force a full reload when a partial changes.

        Returns:
            An empty module list when the event was handled here, None to
            let the host apply its default update
        """
        decision = self.invalidator.handle(ctx.file, ctx.server)
        if decision is ReloadDecision.TRIGGERS_RELOAD:
            return []
        return None

    def transform_index_html(self, html: str, ctx: TransformContext) -> str:
        """Render one page.

        Args:
            html: Raw page HTML
            ctx: Page information; ``ctx.path`` is the page's output path

        Returns:
            Rendered HTML

        Raises:
            PartialDirectoryError: If a configured partial directory is missing
            OSError: If the settings document cannot be read
            jinja2.TemplateError: If the page fails to compile or render
        """
        directories = self.config.partial_directories()
        if directories:
            self.partials.register(directories)

        template = self.renderer.compile(html, self.config.runtime_options)

        settings = self.settings.load()
        page_path = normalize_path(ctx.path)
        context = resolve_context(settings, page_path, self.config.context)

        logger.debug(f"Rendering page {page_path}")
        return self.renderer.render(template, context)

    def render_page(self, html: str, path: str) -> str:
        """Shorthand for ``transform_index_html`` with a bare output path."""
        return self.transform_index_html(html, TransformContext(path=path))


def htmlstage(**options: Any) -> HtmlStagePlugin:
    """Create a plugin from keyword options (see ``PluginConfig``)."""
    return HtmlStagePlugin(PluginConfig(**options))
