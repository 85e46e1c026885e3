"""Domain models for the templating stage configuration and host hooks."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Callable, Protocol

from pydantic import BaseModel, ConfigDict, Field

ContextStrategy = Callable[[Any, str], Any]


class CompileOptions(BaseModel):
    """Options applied when page templates are compiled."""

    model_config = ConfigDict(frozen=True)

    strict: bool = Field(
        default=False, description="Raise on undefined variables instead of rendering ''"
    )
    autoescape: bool = Field(default=False, description="HTML-escape rendered values")
    trim_blocks: bool = Field(default=False, description="Drop first newline after a block tag")
    lstrip_blocks: bool = Field(
        default=False, description="Strip leading whitespace before block tags"
    )
    keep_trailing_newline: bool = Field(
        default=True, description="Preserve the page's trailing newline"
    )


class RuntimeOptions(BaseModel):
    """Options applied to every render call."""

    model_config = ConfigDict(frozen=True)

    helpers: dict[str, Callable[..., Any]] = Field(
        default_factory=dict, description="Helpers visible to a single render"
    )
    partials: dict[str, str] = Field(
        default_factory=dict,
        description="Inline partial sources, preferred over registered partials",
    )


class PluginConfig(BaseModel):
    """Configuration supplied once when the plugin is constructed."""

    model_config = ConfigDict(frozen=True)

    settings_file: Path = Field(..., description="Settings document path")
    context: ContextStrategy | None = Field(
        default=None, description="Per-page context strategy (settings, path) -> context"
    )
    reload_on_partial_change: bool = Field(
        default=True, description="Force a full reload when a partial changes"
    )
    compile_options: CompileOptions = Field(default_factory=CompileOptions)
    runtime_options: RuntimeOptions = Field(default_factory=RuntimeOptions)
    partial_directory: Path | list[Path] | None = Field(
        default=None, description="Partial template directory or directories"
    )
    helpers: dict[str, Callable[..., Any]] = Field(
        default_factory=dict, description="Helpers registered for the build session"
    )
    settings_cache: Path | None = Field(
        default=None, description="Last known good settings copy"
    )

    def partial_directories(self) -> list[Path]:
        """Return the configured partial directories as a list."""
        if self.partial_directory is None:
            return []
        if isinstance(self.partial_directory, list):
            return list(self.partial_directory)
        return [self.partial_directory]

    def cache_path(self) -> Path:
        """Return where the last known good settings copy lives."""
        if self.settings_cache is not None:
            return self.settings_cache
        return Path.cwd() / ".cache" / "htmlstage" / self.settings_file.name


class ReloadChannel(Protocol):
    """Anything the host exposes for pushing messages to connected clients."""

    def send(self, payload: dict[str, Any]) -> None: ...


class TransformContext(BaseModel):
    """Per-page information handed to the HTML transform hook."""

    path: str = Field(..., description="Output path of the page, e.g. /index.html")
    filename: Path | None = Field(default=None, description="Source file of the page")


class HotUpdateContext(BaseModel):
    """File-change notification handed to the hot update hook."""

    file: str = Field(..., description="Changed file path")
    server: Any = Field(..., description="Reload channel with a send(payload) method")
    modules: list[Any] = Field(default_factory=list, description="Affected host modules")


class ReloadDecision(str, Enum):
    """Outcome of a file-change event."""

    IGNORED = "ignored"
    TRIGGERS_RELOAD = "triggers-reload"
