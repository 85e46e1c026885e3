import json
from pathlib import Path

import pytest

from htmlstage import HtmlStagePlugin, PluginConfig


class RecordingChannel:
    """Reload channel that keeps every payload sent to it."""

    def __init__(self):
        self.sent = []

    def send(self, payload):
        self.sent.append(payload)


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"title": "Home"}), encoding="utf-8")
    return path


@pytest.fixture
def partials_dir(tmp_path: Path) -> Path:
    path = tmp_path / "partials"
    path.mkdir()
    (path / "a.html").write_text("<p>A {{ title }}</p>", encoding="utf-8")
    (path / "b.html").write_text("<p>B</p>", encoding="utf-8")
    return path


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / ".cache" / "settings.json"


@pytest.fixture
def make_plugin(settings_file: Path, cache_path: Path):
    def factory(**options) -> HtmlStagePlugin:
        options.setdefault("settings_file", settings_file)
        options.setdefault("settings_cache", cache_path)
        return HtmlStagePlugin(PluginConfig(**options))

    return factory


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()
