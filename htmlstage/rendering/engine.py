"""Template compilation and rendering."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    Undefined,
)

from ..core.models import CompileOptions, RuntimeOptions

logger = logging.getLogger(__name__)

ROOT_HELPER = "resolve_from_root"


def create_environment(
    compile_options: CompileOptions, loader: BaseLoader | None = None
) -> Environment:
    """Create the Jinja2 environment pages are compiled in.

    Args:
        compile_options: Compile-time options
        loader: Loader partials are included from

    Returns:
        Environment with template caching disabled
    """
    return Environment(
        loader=loader,
        undefined=StrictUndefined if compile_options.strict else Undefined,
        autoescape=compile_options.autoescape,
        trim_blocks=compile_options.trim_blocks,
        lstrip_blocks=compile_options.lstrip_blocks,
        keep_trailing_newline=compile_options.keep_trailing_newline,
        cache_size=0,
    )


class TemplateRenderer:
    """Compile page HTML and render it against a resolved context.

    The ``resolve_from_root`` helper is registered before any user helper and
    cannot be replaced by one.
    """

    def __init__(
        self,
        compile_options: CompileOptions,
        loader: BaseLoader | None = None,
        root: Path | None = None,
        helpers: Mapping[str, Callable[..., Any]] | None = None,
    ):
        self.root = root or Path.cwd()
        self.environment = create_environment(compile_options, loader)
        self.environment.globals[ROOT_HELPER] = self.resolve_from_root
        self.register_helpers(helpers or {})

    def resolve_from_root(self, path: str) -> str:
        """Resolve ``path`` against the build root."""
        return os.path.abspath(os.path.join(self.root, path))

    def _usable_helpers(
        self, helpers: Mapping[str, Callable[..., Any]]
    ) -> dict[str, Callable[..., Any]]:
        usable = {}
        for name, helper in helpers.items():
            if name == ROOT_HELPER:
                logger.warning(f"Ignoring helper {name!r}: the name is reserved")
                continue
            usable[name] = helper
        return usable

    def register_helpers(self, helpers: Mapping[str, Callable[..., Any]]) -> None:
        """Register helpers globally for the rest of the build session."""
        self.environment.globals.update(self._usable_helpers(helpers))

    def compile(self, html: str, runtime_options: RuntimeOptions | None = None) -> Template:
        """Compile page HTML into a fresh template.

        Args:
            html: Raw page HTML
            runtime_options: Per-render helpers and inline partials

        Returns:
            Compiled template

        Raises:
            jinja2.TemplateSyntaxError: If the HTML is not a valid template
        """
        environment = self.environment
        helpers: dict[str, Callable[..., Any]] = {}
        if runtime_options is not None:
            if runtime_options.partials:
                environment = environment.overlay(
                    loader=ChoiceLoader(
                        [DictLoader(dict(runtime_options.partials))]
                        + ([environment.loader] if environment.loader else [])
                    )
                )
            helpers = self._usable_helpers(runtime_options.helpers)

        return environment.from_string(html, globals=helpers or None)

    def render(self, template: Template, context: Any) -> str:
        """Render a compiled template.

        A context that is not a mapping is exposed to the template as ``this``.

        Raises:
            jinja2.TemplateError: On any render failure, message intact
        """
        if not isinstance(context, Mapping):
            context = {"this": context}
        return template.render(context)
