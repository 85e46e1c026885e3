"""Environment-driven defaults for the command line."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class StageSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HTMLSTAGE_", case_sensitive=False)

    cache_dir: Path = Path(".cache/htmlstage")
    reload_on_partial_change: bool = True
    strict: bool = False
    watch_interval: float = 0.5


@lru_cache(maxsize=1)
def get_settings() -> StageSettings:
    return StageSettings()
