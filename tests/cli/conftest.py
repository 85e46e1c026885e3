import json
from pathlib import Path

import pytest

from htmlstage.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    """Keep the settings cache and env-driven defaults inside tmp_path."""
    monkeypatch.chdir(tmp_path)
    for name in ("HTMLSTAGE_CACHE_DIR", "HTMLSTAGE_STRICT", "HTMLSTAGE_RELOAD_ON_PARTIAL_CHANGE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A small site: two pages, one partial, a settings document."""
    root = tmp_path / "site"
    pages = root / "pages"
    (pages / "blog").mkdir(parents=True)
    (pages / "index.html").write_text(
        '<h1>{{ title }}</h1>{% include "footer.html" %}', encoding="utf-8"
    )
    (pages / "blog" / "index.html").write_text("<h2>{{ title }} blog</h2>", encoding="utf-8")

    partials = root / "partials"
    partials.mkdir()
    (partials / "footer.html").write_text("<footer>{{ title }}</footer>", encoding="utf-8")

    (root / "settings.json").write_text(json.dumps({"title": "Home"}), encoding="utf-8")
    return root
