"""CLI argument parsers and validators."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Any

import typer


def parse_import(value: str) -> Any:
    """Import an object given as ``module:attribute``."""
    if ":" not in value:
        raise typer.BadParameter(f"Must be MODULE:ATTRIBUTE, got: {value!r}")
    module_name, attribute = value.split(":", 1)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import module {module_name!r}: {e}") from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise typer.BadParameter(
            f"Module {module_name!r} has no attribute {attribute!r}"
        ) from e


def parse_helpers(value: str) -> dict[str, Any]:
    """Load a helper mapping (name -> callable) from ``module:attribute``."""
    helpers = parse_import(value)
    if not isinstance(helpers, Mapping):
        raise typer.BadParameter(f"{value!r} is not a mapping of helpers")
    for name, helper in helpers.items():
        if not callable(helper):
            raise typer.BadParameter(f"Helper {name!r} in {value!r} is not callable")
    return dict(helpers)


def parse_context(value: str) -> Any:
    """Load a context strategy callable from ``module:attribute``."""
    strategy = parse_import(value)
    if not callable(strategy):
        raise typer.BadParameter(f"{value!r} is not callable")
    return strategy
