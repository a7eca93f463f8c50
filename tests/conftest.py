"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from hooklocator.settings import LocatorConfig


def write_php(path: Path, *lines: str) -> Path:
    """Write a PHP file made of *lines*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Redirect the settings file to a temp directory."""
    config_home = tmp_path / "xdg_config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "hooklocator" / "settings.json"


@pytest.fixture
def wp_content(tmp_path):
    """Create a fake wp-content tree with two plugins, one theme and our own install."""
    content = tmp_path / "wp-content"
    plugins = content / "plugins"
    themes = content / "themes"

    write_php(
        plugins / "akismet" / "akismet.php",
        "<?php",
        "// add_action( 'init', 'commented_out' );",
        "add_action( 'init', array( 'Akismet', 'init' ) );",
        "add_action( 'my_init_hook', 'akismet_other' );",
    )
    write_php(
        plugins / "hello" / "includes" / "hello.php",
        "<?php",
        "function hello_boot() {",
        '    do_action("init");',
        "}",
    )
    (plugins / "hello" / "readme.txt").write_text("do_action('init');\n")
    write_php(
        themes / "twentyten" / "functions.php",
        "<?php",
        "/**",
        " * apply_filters( 'init', $value );",
        " */",
        "$value = apply_filters( 'init', $value );",
    )
    write_php(
        plugins / "hook-locator" / "hook-locator.php",
        "<?php",
        "add_action( 'init', 'hook_locator_boot' );",
    )
    return content


@pytest.fixture
def config(wp_content):
    return LocatorConfig(
        plugins_dir=wp_content / "plugins",
        themes_dir=wp_content / "themes",
        self_dir=wp_content / "plugins" / "hook-locator",
    )
