"""Render a directory of pages through the plugin."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from jinja2 import TemplateError

from ..core.errors import PartialDirectoryError, SettingsFallbackError
from ..core.models import TransformContext
from ..plugin import HtmlStagePlugin
from ..rendering.io import atomic_write_text, read_text

logger = logging.getLogger(__name__)


def _is_within(path: Path, parent: Path) -> bool:
    try:
        path.resolve().relative_to(parent.resolve())
    except ValueError:
        return False
    return True


def discover_pages(pages_dir: Path, exclude: Iterable[Path] = ()) -> list[Path]:
    """Find the HTML pages under ``pages_dir``.

    Hidden files and anything under an excluded directory (output, partials)
    are skipped.
    """
    excluded = list(exclude)
    pages = []
    for path in sorted(pages_dir.rglob("*.html")):
        relative = path.relative_to(pages_dir)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if any(_is_within(path, directory) for directory in excluded):
            continue
        pages.append(path)
    return pages


def page_path(page: Path, pages_dir: Path) -> str:
    """Output path of a page as the host would report it, e.g. ``/blog/index.html``."""
    return "/" + page.relative_to(pages_dir).as_posix()


def render_pages(
    plugin: HtmlStagePlugin,
    pages: Iterable[Path],
    pages_dir: Path,
    out_dir: Path,
) -> list[Path]:
    """Render pages into ``out_dir``, continuing past pages that fail.

    Args:
        plugin: Configured plugin
        pages: Page files to render
        pages_dir: Directory the pages are relative to
        out_dir: Output directory

    Returns:
        Pages that failed to render

    Raises:
        PartialDirectoryError: If a configured partial directory is missing
    """
    failures: list[Path] = []
    for page in pages:
        ctx = TransformContext(path=page_path(page, pages_dir), filename=page)
        try:
            html = plugin.transform_index_html(read_text(page), ctx)
        except PartialDirectoryError:
            raise
        except (OSError, ValueError, TemplateError, SettingsFallbackError) as exc:
            logger.error(f"Failed to render {page}: {exc}")
            failures.append(page)
            continue

        output_path = out_dir / page.relative_to(pages_dir)
        atomic_write_text(output_path, html)
        logger.info(f"Rendered {page} → {output_path}")

    return failures
