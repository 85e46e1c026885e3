"""Tests for partial discovery and registration."""

import pytest

from htmlstage.core.errors import PartialDirectoryError
from htmlstage.core.paths import canonical_file_path
from htmlstage.rendering.partials import PartialRegistry, iter_partial_files, partial_name


def test_partial_name_keeps_relative_path_and_extension(tmp_path):
    assert partial_name(tmp_path / "nav" / "header.html", tmp_path) == "nav/header.html"


def test_register_adds_names_sources_and_identities(partials_dir):
    registry = PartialRegistry()

    names = registry.register(partials_dir)

    assert names == ["a.html", "b.html"]
    assert registry.sources["b.html"] == "<p>B</p>"
    assert registry.identities == {
        canonical_file_path(partials_dir / "a.html"),
        canonical_file_path(partials_dir / "b.html"),
    }


def test_register_walks_subdirectories_and_skips_hidden_files(partials_dir):
    (partials_dir / "nav").mkdir()
    (partials_dir / "nav" / "menu.html").write_text("menu", encoding="utf-8")
    (partials_dir / ".a.html.swp").write_text("junk", encoding="utf-8")
    (partials_dir / ".git").mkdir()
    (partials_dir / ".git" / "HEAD").write_text("ref", encoding="utf-8")

    registry = PartialRegistry()
    registry.register(partials_dir)

    assert registry.names() == ["a.html", "b.html", "nav/menu.html"]


def test_reregistering_overwrites_content(partials_dir):
    registry = PartialRegistry()
    registry.register(partials_dir)

    (partials_dir / "b.html").write_text("<p>B2</p>", encoding="utf-8")
    registry.register(partials_dir)

    assert registry.names() == ["a.html", "b.html"]
    assert registry.sources["b.html"] == "<p>B2</p>"
    assert len(registry.identities) == 2


def test_new_files_are_picked_up_and_identities_never_shrink(partials_dir):
    registry = PartialRegistry()
    registry.register(partials_dir)

    (partials_dir / "c.html").write_text("<p>C</p>", encoding="utf-8")
    (partials_dir / "a.html").unlink()
    registry.register(partials_dir)

    assert canonical_file_path(partials_dir / "c.html") in registry
    assert canonical_file_path(partials_dir / "a.html") in registry


def test_later_directories_win_on_name_clash(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "header.html").write_text("first", encoding="utf-8")
    (second / "header.html").write_text("second", encoding="utf-8")

    registry = PartialRegistry()
    registry.register([first, second])

    assert registry.sources["header.html"] == "second"
    assert len(registry.identities) == 2


def test_loader_sees_registered_partials(partials_dir):
    registry = PartialRegistry()
    registry.register(partials_dir)

    assert registry.loader.mapping["a.html"] == "<p>A {{ title }}</p>"


def test_missing_directory_is_a_configuration_error(tmp_path):
    registry = PartialRegistry()

    with pytest.raises(PartialDirectoryError, match="not found"):
        registry.register(tmp_path / "missing")


def test_file_instead_of_directory_is_rejected(tmp_path, partials_dir):
    registry = PartialRegistry()

    with pytest.raises(PartialDirectoryError):
        registry.register([partials_dir, partials_dir / "a.html"])

    # Nothing is registered when any entry is invalid
    assert registry.names() == []


def test_iter_partial_files_rejects_missing_directory(tmp_path):
    with pytest.raises(PartialDirectoryError):
        list(iter_partial_files(tmp_path / "nope"))


def test_binary_files_are_skipped(partials_dir):
    logo = partials_dir / "logo.png"
    logo.write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xd8")

    registry = PartialRegistry()
    names = registry.register(partials_dir)

    assert names == ["a.html", "b.html"]
    assert "logo.png" not in registry.sources
    assert canonical_file_path(logo) not in registry
