"""CLI interface for Hook Locator."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from hooklocator.core.detail import DEVELOPMENT_TIPS, describe_location
from hooklocator.core.engine import HookLocator
from hooklocator.core.matcher import describe, label_for
from hooklocator.core.reference import DetailError
from hooklocator.core.view import SORT_DIRS, SORT_KEYS
from hooklocator.models.match import MatchRecord
from hooklocator.settings import KNOWN_KEYS, LocatorConfig, Settings, SettingsError
from hooklocator.utils import bytes_to_human, format_elapsed, truncate_snippet


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_locator(ctx: click.Context) -> HookLocator:
    opts = ctx.obj
    settings = Settings(opts["config"])
    config = LocatorConfig.from_settings(
        settings,
        plugins_dir=opts["plugins_dir"],
        themes_dir=opts["themes_dir"],
    )
    return HookLocator(config)


_PATH = click.Path(path_type=Path, file_okay=False)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option("--plugins-dir", type=_PATH, default=None, help="Plugin container directory")
@click.option("--themes-dir", type=_PATH, default=None, help="Theme container directory")
@click.option("--config", type=click.Path(path_type=Path, dir_okay=False), default=None, help="Settings file")
@click.pass_context
def main(
    ctx: click.Context,
    verbose: int,
    plugins_dir: Path | None,
    themes_dir: Path | None,
    config: Path | None,
) -> None:
    """Hook Locator: find where WordPress hooks are used in plugins and themes."""
    _setup_logging(verbose)
    ctx.obj = {"plugins_dir": plugins_dir, "themes_dir": themes_dir, "config": config}


# ── roots ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def roots(ctx: click.Context, as_json: bool) -> None:
    """List the plugin and theme directories that can be searched."""
    locator = _build_locator(ctx)
    grouped = locator.grouped_roots()

    if as_json:
        data = {
            group: [{"key": r.key, "name": r.name, "path": str(r.path)} for r in members]
            for group, members in grouped.items()
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not any(grouped.values()):
        click.echo("No plugin or theme directories found.")
        return

    click.echo(f"\n  {click.style('all', fg='cyan', bold=True):30s}  All plugins and themes")
    for group, members in grouped.items():
        if not members:
            continue
        click.echo(f"\n  {click.style(group.capitalize(), fg='blue', bold=True)}")
        for root in members:
            click.echo(f"    {click.style(root.key, fg='cyan'):30s}  {root.name}")
    click.echo()


# ── search ───────────────────────────────────────────────────────────────

def _record_to_dict(locator: HookLocator, record: MatchRecord) -> dict:
    return {
        "key": record.key,
        "file": str(record.file),
        "line": record.line,
        "kind": record.kind,
        "label": label_for(record.kind),
        "snippet": record.snippet,
        "target": record.target,
        "ref": locator.build_reference(record.file, record.line),
    }


@main.command()
@click.argument("hook_name")
@click.option("--scope", "-s", default="all", help="Root key to search, or 'all'")
@click.option("--sort", "sort_key", default="file", type=click.Choice(SORT_KEYS), help="Sort column")
@click.option("--order", "sort_dir", default="asc", type=click.Choice(SORT_DIRS), help="Sort direction")
@click.option("--page", "page_number", default=1, type=int, help="Page to show (25 results per page)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def search(
    ctx: click.Context,
    hook_name: str,
    scope: str,
    sort_key: str,
    sort_dir: str,
    page_number: int,
    as_json: bool,
) -> None:
    """Search plugins and themes for calls naming HOOK_NAME."""
    locator = _build_locator(ctx)
    result = locator.search(hook_name, scope)
    page = locator.page(result, sort_key, sort_dir, page_number)

    if as_json:
        data = {
            "target": result.target,
            "scope": result.scope,
            "files_scanned": result.files_scanned,
            "truncated": result.truncated,
            "total_items": page.total_items,
            "total_pages": page.total_pages,
            "page": page.page,
            "has_next": page.has_next,
            "items": [_record_to_dict(locator, r) for r in page.items],
            "failures": [
                {"path": str(f.path), "kind": f.kind, "message": f.message}
                for f in result.failures
            ],
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not result.records:
        click.echo(f"\nNo hooks found matching '{result.target}'.")
        click.echo("  Check the spelling, try another directory, or search all plugins and themes.\n")
        _print_scan_notes(result.files_scanned, result.truncated, len(result.failures))
        return

    noun = "result" if page.total_items == 1 else "results"
    click.echo(
        f"\nFound {click.style(str(page.total_items), fg='green', bold=True)} {noun} for "
        f"{click.style(result.target, fg='cyan', bold=True)} "
        f"({result.files_scanned:,} files in {format_elapsed(result.elapsed)})\n"
    )

    for record in page.items:
        _, display = describe_location(record.file, locator.config.plugins_dir, locator.config.themes_dir)
        kind = click.style(label_for(record.kind), fg="magenta")
        click.echo(f"  {display}:{record.line}  {kind}")
        click.echo(f"    {truncate_snippet(record.snippet)}")
        click.echo(click.style(f"    ref: {locator.build_reference(record.file, record.line)}", fg="bright_black"))

    footer = f"\nPage {page.page} of {max(page.total_pages, 1)}"
    if page.has_next:
        footer += f"  (next: --page {page.page + 1})"
    click.echo(footer)
    _print_scan_notes(result.files_scanned, result.truncated, len(result.failures))


def _print_scan_notes(files_scanned: int, truncated: bool, failures: int) -> None:
    if truncated:
        click.echo(click.style(f"  File limit reached after {files_scanned:,} files; results are partial.", fg="yellow"))
    if failures:
        click.echo(click.style(f"  {failures} path(s) could not be read.", fg="yellow"))


# ── detail ───────────────────────────────────────────────────────────────

@main.command()
@click.argument("ref")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def detail(ctx: click.Context, ref: str, as_json: bool) -> None:
    """Show the code around one search result."""
    locator = _build_locator(ctx)
    try:
        view = locator.resolve(ref)
    except DetailError as exc:
        if as_json:
            click.echo(json.dumps({"error": type(exc).__name__, "message": str(exc)}))
        else:
            click.echo(f"{click.style('✗', fg='red')} {exc}", err=True)
        sys.exit(1)

    if as_json:
        data = {
            "file": str(view.file),
            "line": view.line,
            "kind": view.kind,
            "label": label_for(view.kind),
            "description": describe(view.kind),
            "origin": view.origin,
            "display_path": view.display_path,
            "file_size": view.file_size,
            "start": view.start,
            "end": view.end,
            "total_lines": view.total_lines,
            "target_text": view.target_text,
            "lines": [{"number": c.number, "text": c.text, "is_target": c.is_target} for c in view.lines],
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"\n  {click.style('File Information', bold=True)}")
    click.echo(f"    File Path:   {view.display_path}")
    click.echo(f"    File Type:   {view.origin.capitalize()} file ({bytes_to_human(view.file_size)})")
    click.echo(f"    Line Number: {click.style(f'{view.line:,}', bold=True)}")

    click.echo(f"\n  {click.style('Code Context', bold=True)}  Lines {view.start}-{view.end} of {view.total_lines}")
    for ctx_line in view.lines:
        if ctx_line.is_target:
            click.echo(click.style(f"  > {ctx_line.number:4d}  {ctx_line.text}", fg="yellow", bold=True))
        else:
            click.echo(f"    {ctx_line.number:4d}  {ctx_line.text}")

    click.echo(f"\n  {click.style('Analysis', bold=True)}")
    click.echo(f"    Hook Type: {click.style(label_for(view.kind), fg='magenta')}")
    if view.target_text:
        click.echo(f"    Call:      {truncate_snippet(view.target_text)}")
    click.echo(f"    {describe(view.kind)}")
    click.echo(f"\n  {click.style('Development Tips', bold=True)}")
    for tip in DEVELOPMENT_TIPS:
        click.echo(f"    • {tip}")
    click.echo()


# ── ref ──────────────────────────────────────────────────────────────────

@main.command("ref")
@click.argument("file", type=click.Path(path_type=Path, dir_okay=False))
@click.argument("line", type=int)
def ref_cmd(file: Path, line: int) -> None:
    """Print the detail reference for FILE at LINE."""
    click.echo(HookLocator.build_reference(file, line))


# ── config ───────────────────────────────────────────────────────────────

def _parse_value(raw: str) -> object:
    """Read VALUE as JSON when it parses ("20" -> 20), otherwise as text."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@main.command("config")
@click.argument("key", required=False, type=click.Choice(sorted(KNOWN_KEYS)))
@click.argument("value", required=False)
@click.option("--unset", is_flag=True, help="Remove KEY so its default applies")
@click.pass_context
def config_cmd(ctx: click.Context, key: str | None, value: str | None, unset: bool) -> None:
    """Show or change stored settings.

    With no arguments, list every stored setting. With KEY, show its stored
    value. With KEY and VALUE, store VALUE after checking it.
    """
    settings = Settings(ctx.obj["config"])

    if key is None:
        if unset or value is not None:
            raise click.UsageError("KEY is required.")
        stored = list(settings.items())
        if not stored:
            click.echo(f"No settings stored in {settings.path}.")
            return
        for name, current in stored:
            click.echo(f"{click.style(name, fg='cyan')} = {json.dumps(current)}")
        return

    try:
        if unset:
            if value is not None:
                raise click.UsageError("--unset does not take a VALUE.")
            if settings.unset(key):
                click.echo(f"{click.style('✓', fg='green')} Removed {key}")
            else:
                click.echo(f"{key} was not set.")
            return
        if value is None:
            current = settings.get(key)
            click.echo("(not set)" if current is None else json.dumps(current))
            return
        stored_value = settings.set(key, _parse_value(value))
    except SettingsError as exc:
        click.echo(f"{click.style('✗', fg='red')} {exc}", err=True)
        sys.exit(1)
    click.echo(f"{click.style('✓', fg='green')} {key} = {json.dumps(stored_value)}")
