"""Tests for the search/detail engine."""

from __future__ import annotations

import dataclasses

import pytest

from tests.conftest import write_php
from hooklocator.core.engine import HookLocator
from hooklocator.core.reference import FileNotFound, InvalidReference


@pytest.fixture
def locator(config):
    return HookLocator(config)


class TestRoots:
    def test_own_install_not_listed(self, locator):
        keys = {r.key for r in locator.list_roots()}
        assert keys == {"plugin:akismet", "plugin:hello", "theme:twentyten"}

    def test_grouped(self, locator):
        grouped = locator.grouped_roots()
        assert [r.key for r in grouped["plugins"]] == ["plugin:akismet", "plugin:hello"]
        assert [r.key for r in grouped["themes"]] == ["theme:twentyten"]


class TestSearch:
    def test_search_all(self, locator, wp_content):
        result = locator.search("init")

        found = sorted((r.file.name, r.line, r.kind) for r in result.records.values())
        assert found == [
            ("akismet.php", 3, "add_action"),
            ("functions.php", 5, "apply_filters"),
            ("hello.php", 3, "do_action"),
        ]
        assert result.files_scanned == 3
        assert not result.truncated
        assert not result.partial

    def test_records_keyed_by_identity(self, locator):
        result = locator.search("init")
        assert all(key == record.key for key, record in result.records.items())

    def test_single_scope(self, locator):
        result = locator.search("init", "theme:twentyten")
        assert [r.kind for r in result.records.values()] == ["apply_filters"]
        assert result.scope == "theme:twentyten"
        assert result.files_scanned == 1

    def test_unknown_scope_scans_nothing(self, locator):
        result = locator.search("init", "plugin:missing")
        assert result.records == {}
        assert result.files_scanned == 0

    def test_own_install_not_scanned_even_by_key(self, locator):
        assert locator.search("init", "plugin:hook-locator").records == {}

    @pytest.mark.parametrize("target", ["", "   ", None])
    def test_blank_target_is_empty_not_an_error(self, locator, target):
        result = locator.search(target)
        assert result.records == {}
        assert result.files_scanned == 0

    def test_target_is_trimmed(self, locator):
        assert len(locator.search("  init  ").records) == 3

    def test_substring_target_not_found(self, locator):
        assert locator.search("my_init").records == {}

    def test_budget_caps_files_read(self, config, tmp_path):
        plugins = tmp_path / "budget" / "plugins"
        themes = tmp_path / "budget" / "themes"
        for i in range(3):
            write_php(plugins / "alpha" / f"a{i}.php", "do_action( 'init' );")
        for i in range(2):
            write_php(themes / "beta" / f"b{i}.php", "do_action( 'init' );")
        small = dataclasses.replace(config, plugins_dir=plugins, themes_dir=themes, max_files=3)

        result = HookLocator(small).search("init")

        assert result.files_scanned == 3
        assert len(result.records) == 3
        assert result.truncated
        assert {r.file.parent.name for r in result.records.values()} == {"alpha"}

    def test_oversized_file_contributes_nothing(self, config, wp_content):
        big = wp_content / "plugins" / "hello" / "big.php"
        big.write_text("do_action( 'init' );\n" * 200)
        small = dataclasses.replace(config, max_file_bytes=1024)

        result = HookLocator(small).search("init")

        assert big not in {r.file for r in result.records.values()}
        assert result.files_scanned == 4

    def test_unreadable_file_is_recorded_and_skipped(self, locator, monkeypatch):
        from hooklocator.core import engine as engine_mod

        original = engine_mod.find_matches

        def flaky(path, target):
            if path.name == "hello.php":
                raise PermissionError("Permission denied")
            return original(path, target)

        monkeypatch.setattr(engine_mod, "find_matches", flaky)
        result = locator.search("init")

        assert len(result.records) == 2
        assert result.partial
        assert [(f.path.name, f.kind) for f in result.failures] == [("hello.php", "file")]

    def test_fresh_walk_every_time(self, locator, wp_content):
        assert len(locator.search("init").records) == 3
        write_php(wp_content / "plugins" / "hello" / "late.php", "has_action( 'init' );")
        assert len(locator.search("init").records) == 4

    def test_progress_callback(self, locator):
        events: list[tuple[str, str]] = []
        locator.search("init", on_progress=lambda key, status: events.append((key, status)))
        assert ("plugin:akismet", "scanning") in events
        assert ("theme:twentyten", "done") in events

    def test_configured_extension(self, config, wp_content):
        write_php(wp_content / "plugins" / "hello" / "legacy.inc", "do_action( 'init' );")
        result = HookLocator(dataclasses.replace(config, extension=".inc")).search("init")
        assert [r.file.name for r in result.records.values()] == ["legacy.inc"]


class TestPageAndDetail:
    def test_page(self, locator):
        page = locator.page(locator.search("init"), sort_key="line", sort_dir="desc")
        assert [r.line for r in page.items] == [5, 3, 3]
        assert page.total_pages == 1

    def test_reference_round_trip(self, locator):
        record = next(iter(locator.search("init", "plugin:akismet").records.values()))
        view = locator.resolve(locator.build_reference(record.file, record.line))

        assert (view.file, view.line) == (record.file, record.line)
        assert view.kind == record.kind
        assert view.origin == "plugin"

    def test_detail_uses_configured_radius(self, config, wp_content):
        path = wp_content / "themes" / "twentyten" / "functions.php"
        wide = HookLocator(dataclasses.replace(config, detail_radius=1))
        view = wide.resolve(wide.build_reference(path, 5))
        assert [c.number for c in view.lines] == [4, 5]

    def test_detail_errors_propagate(self, locator, tmp_path):
        with pytest.raises(InvalidReference):
            locator.resolve("???")
        with pytest.raises(FileNotFound):
            locator.resolve(locator.build_reference(tmp_path / "gone.php", 1))
