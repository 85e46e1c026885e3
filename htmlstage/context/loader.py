"""Settings document loading with a last-known-good fallback."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import SettingsFallbackError
from ..rendering.io import atomic_write_text, read_text

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}
_UNRESOLVED = object()


def parse_settings(text: str, suffix: str = ".json") -> Any:
    """Parse settings text as JSON, or YAML when the suffix says so.

    Args:
        text: Raw document text
        suffix: File suffix of the document

    Returns:
        Parsed object/array/scalar tree

    Raises:
        json.JSONDecodeError: On malformed JSON
        yaml.YAMLError: On malformed YAML
    """
    if suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


class DeferredSettings:
    """Settings read from the last known good copy, but only when asked for."""

    def __init__(self, cache_path: Path, suffix: str = ".json"):
        self.cache_path = cache_path
        self.suffix = suffix
        self._value: Any = _UNRESOLVED

    @property
    def resolved(self) -> bool:
        return self._value is not _UNRESOLVED

    def resolve(self) -> Any:
        """Load the cached settings copy, once.

        Raises:
            SettingsFallbackError: If no cached copy has ever been written
        """
        if self._value is _UNRESOLVED:
            if not self.cache_path.is_file():
                raise SettingsFallbackError(
                    f"Settings are malformed and no last known good copy exists at {self.cache_path}"
                )
            logger.debug(f"Reading last known good settings from {self.cache_path}")
            self._value = parse_settings(read_text(self.cache_path), self.suffix)
        return self._value

    def __repr__(self) -> str:
        return f"DeferredSettings({str(self.cache_path)!r}, resolved={self.resolved})"


class SettingsLoader:
    """Reload and parse the settings document on every call."""

    def __init__(self, settings_file: Path, cache_path: Path):
        self.settings_file = settings_file
        self.cache_path = cache_path

    def load(self) -> Any:
        """Return the parsed settings, or a deferred fallback if they are malformed.

        Returns:
            Parsed settings value or a DeferredSettings instance

        Raises:
            OSError: If the settings document cannot be read
        """
        # Undecodable bytes become U+FFFD and fail the parse below
        text = read_text(self.settings_file, errors="replace")
        suffix = self.settings_file.suffix
        try:
            value = parse_settings(text, suffix)
        except (json.JSONDecodeError, yaml.YAMLError):
            return DeferredSettings(self.cache_path, suffix)

        # The raw text is kept so the fallback re-parses to an identical value
        atomic_write_text(self.cache_path, text)
        return value
