"""Main CLI application."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..config import get_settings
from ..core.errors import PartialDirectoryError
from ..core.models import CompileOptions, PluginConfig
from ..plugin import HtmlStagePlugin
from ..rendering.partials import PartialRegistry
from . import build, watch
from .parsers import parse_context, parse_helpers

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="htmlstage",
    help="Render HTML pages through Jinja2 with settings-driven context.",
)

PagesDir = Annotated[
    Path,
    typer.Argument(help="Directory containing the HTML pages.", exists=True, file_okay=False),
]
SettingsOption = Annotated[
    Path,
    typer.Option("--settings", help="Settings document (JSON or YAML).", metavar="FILE"),
]
OutOption = Annotated[
    Path, typer.Option("--out", help="Output directory for rendered pages.", metavar="DIR")
]
PartialsOption = Annotated[
    list[Path],
    typer.Option("--partials", help="Partial template directory. Repeatable.", metavar="DIR"),
]
RootOption = Annotated[
    Optional[Path],
    typer.Option("--root", help="Build root for resolve_from_root (default: cwd).", metavar="DIR"),
]
HelpersOption = Annotated[
    str,
    typer.Option("--helpers", help="Helper mapping to register.", metavar="MODULE:ATTR"),
]
ContextOption = Annotated[
    str,
    typer.Option("--context", help="Per-page context strategy.", metavar="MODULE:ATTR"),
]
StrictOption = Annotated[
    bool, typer.Option("--strict", help="Fail on undefined template variables.")
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _make_plugin(
    settings_file: Path,
    partials: list[Path],
    root: Path | None,
    helpers: str,
    context: str,
    strict: bool,
) -> HtmlStagePlugin:
    stage_settings = get_settings()
    config = PluginConfig(
        settings_file=settings_file,
        context=parse_context(context) if context else None,
        reload_on_partial_change=stage_settings.reload_on_partial_change,
        compile_options=CompileOptions(strict=strict or stage_settings.strict),
        partial_directory=partials or None,
        helpers=parse_helpers(helpers) if helpers else {},
        settings_cache=stage_settings.cache_dir / settings_file.name,
    )
    plugin = HtmlStagePlugin(config)
    plugin.config_resolved(root or Path.cwd())
    return plugin


def _build(
    plugin: HtmlStagePlugin,
    pages_dir: Path,
    out: Path,
    partials: list[Path],
    pages: list[Path] | None = None,
) -> list[Path]:
    if pages is None:
        pages = build.discover_pages(pages_dir, exclude=[out, *partials])
    try:
        return build.render_pages(plugin, pages, pages_dir, out)
    except PartialDirectoryError as exc:
        raise typer.BadParameter(str(exc), param_hint="--partials") from exc


@app.command()
def render(
    pages_dir: PagesDir,
    settings_file: SettingsOption,
    out: OutOption,
    partials: PartialsOption = [],
    root: RootOption = None,
    helpers: HelpersOption = "",
    context: ContextOption = "",
    strict: StrictOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Render every page under PAGES_DIR into the output directory."""
    _configure_logging(verbose)

    plugin = _make_plugin(settings_file, partials, root, helpers, context, strict)
    failures = _build(plugin, pages_dir, out, partials)

    if failures:
        logger.error(f"{len(failures)} page(s) failed to render")
        raise typer.Exit(code=1)


@app.command(name="partials")
def list_partials(
    directories: Annotated[
        list[Path], typer.Argument(help="Partial template directories.", metavar="DIR")
    ],
) -> None:
    """List the partial names templates can include."""
    registry = PartialRegistry()
    try:
        registry.register(directories)
    except PartialDirectoryError as exc:
        raise typer.BadParameter(str(exc), param_hint="DIR") from exc

    for name in registry.names():
        typer.echo(name)


@app.command(name="watch")
def watch_pages(
    pages_dir: PagesDir,
    settings_file: SettingsOption,
    out: OutOption,
    partials: PartialsOption = [],
    root: RootOption = None,
    helpers: HelpersOption = "",
    context: ContextOption = "",
    strict: StrictOption = False,
    interval: Annotated[
        Optional[float],
        typer.Option("--interval", help="Polling interval in seconds.", metavar="SECONDS"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Render every page, then re-render as pages, partials or settings change."""
    _configure_logging(verbose)

    plugin = _make_plugin(settings_file, partials, root, helpers, context, strict)
    delay = interval if interval is not None else get_settings().watch_interval
    watched = [pages_dir, settings_file, *partials]

    _build(plugin, pages_dir, out, partials)
    state = watch.snapshot(watched)
    logger.info(f"Watching {pages_dir} for changes (Ctrl+C to stop)")

    try:
        while True:
            time.sleep(delay)
            current = watch.snapshot(watched)
            changes = watch.changed_files(state, current)
            state = current
            if not changes:
                continue

            pages = build.discover_pages(pages_dir, exclude=[out, *partials])
            rebuild_all, dirty = watch.plan_rebuild(plugin, changes, pages)
            if rebuild_all:
                _build(plugin, pages_dir, out, partials, pages)
            elif dirty:
                _build(plugin, pages_dir, out, partials, dirty)
            # Output written inside a watched directory must not retrigger
            state = watch.snapshot(watched)
    except KeyboardInterrupt:
        logger.info("Stopped watching")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
