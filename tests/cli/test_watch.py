"""Tests for the polling watcher and rebuild planning."""

import os

from htmlstage import PluginConfig
from htmlstage.cli.watch import RebuildChannel, changed_files, plan_rebuild, snapshot
from htmlstage.core.paths import canonical_file_path
from htmlstage.plugin import HtmlStagePlugin


def bump_mtime(path, seconds=10):
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + seconds))


def rendered_plugin(site, **options):
    plugin = HtmlStagePlugin(
        PluginConfig(
            settings_file=site / "settings.json",
            partial_directory=site / "partials",
            **options,
        )
    )
    plugin.render_page("{{ title }}", "/index.html")
    return plugin


def test_snapshot_covers_files_and_directories(site):
    state = snapshot([site / "pages", site / "settings.json", site / "missing"])

    assert set(state) == {
        canonical_file_path(site / "pages" / "index.html"),
        canonical_file_path(site / "pages" / "blog" / "index.html"),
        canonical_file_path(site / "settings.json"),
    }


def test_changed_files_reports_added_removed_and_modified(site):
    pages = site / "pages"
    before = snapshot([pages])

    bump_mtime(pages / "index.html")
    (pages / "blog" / "index.html").unlink()
    (pages / "new.html").write_text("new", encoding="utf-8")

    assert changed_files(before, snapshot([pages])) == sorted(
        [
            canonical_file_path(pages / "index.html"),
            canonical_file_path(pages / "blog" / "index.html"),
            canonical_file_path(pages / "new.html"),
        ]
    )


def test_changed_files_empty_without_changes(site):
    state = snapshot([site])
    assert changed_files(state, dict(state)) == []


def test_rebuild_channel_only_reacts_to_full_reload():
    channel = RebuildChannel()
    channel.send({"type": "update"})
    assert not channel.full_reload

    channel.send({"type": "full-reload"})
    assert channel.full_reload


def test_partial_change_rebuilds_everything(site):
    plugin = rendered_plugin(site)
    pages = [site / "pages" / "index.html"]

    rebuild_all, dirty = plan_rebuild(
        plugin, [canonical_file_path(site / "partials" / "footer.html")], pages
    )

    assert rebuild_all
    assert dirty == []


def test_settings_change_rebuilds_everything(site):
    plugin = rendered_plugin(site)

    rebuild_all, _ = plan_rebuild(plugin, [canonical_file_path(site / "settings.json")], [])

    assert rebuild_all


def test_page_change_rebuilds_that_page(site):
    plugin = rendered_plugin(site)
    page = site / "pages" / "blog" / "index.html"

    rebuild_all, dirty = plan_rebuild(
        plugin, [canonical_file_path(page)], [site / "pages" / "index.html", page]
    )

    assert not rebuild_all
    assert dirty == [page]


def test_partial_change_with_reload_disabled_rebuilds_nothing(site):
    plugin = rendered_plugin(site, reload_on_partial_change=False)

    rebuild_all, dirty = plan_rebuild(
        plugin, [canonical_file_path(site / "partials" / "footer.html")], []
    )

    assert not rebuild_all
    assert dirty == []
