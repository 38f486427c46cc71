"""Click-based CLI for tokenkit."""

import json
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from . import __version__
from .config import TokenKitConfig, load_config
from .detail import build_detail, get_lite_collections
from .errors import TokenKitError
from .exporters import render
from .models import AliasMode, ColorFormat, ExportFormat
from .source import SnapshotSource
from .storage import JSONFileStore, TokenStorage
from .tokens_logging import LogCategory, get_category_logger, setup_logging
from .tree import scan_all_tokens

logger = get_category_logger(LogCategory.CLI)


def _fail(error: TokenKitError) -> NoReturn:
    click.echo(error.format(use_color=sys.stderr.isatty()), err=True)
    sys.exit(error.exit_code)


def _storage(ctx: click.Context, file_key: str | None = None) -> TokenStorage:
    config: TokenKitConfig = ctx.obj["config"]
    store = JSONFileStore(config.store_path(ctx.obj["project"]))
    return TokenStorage(store, file_key=file_key)


def _parse_unit_overrides(values: tuple[str, ...]) -> dict[str, str] | None:
    if not values:
        return None
    overrides: dict[str, str] = {}
    for item in values:
        variable_id, sep, unit = item.partition("=")
        if not sep or not variable_id or not unit:
            raise click.BadParameter(
                f"expected VARIABLE_ID=UNIT, got {item!r}", param_hint="--unit-for"
            )
        overrides[variable_id] = unit
    return overrides


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
@click.option(
    "--config", "config_file", type=click.Path(exists=True), help="Configuration file path"
)
@click.option(
    "--project",
    "-p",
    type=click.Path(file_okay=False),
    default=".",
    help="Project directory (config and token store location)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    config_file: str | None,
    project: str,
) -> None:
    """tokenkit - design token scanning, resolution and export."""
    if quiet and verbose:
        click.echo("Error: --quiet and --verbose are mutually exclusive", err=True)
        sys.exit(1)

    project_path = Path(project).resolve()
    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(project_path, config_path)
    except TokenKitError as e:
        _fail(e)

    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    setup_logging(
        level=config.logging.level,
        quiet=quiet,
        verbose=verbose,
        log_file=log_file,
        log_format=config.logging.format,
        rotation_count=config.logging.rotation_count,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["project"] = project_path
    ctx.obj["config_file"] = config_path

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("snapshot", type=click.Path())
@click.option("--save", is_flag=True, help="Store the scanned tree in the token store")
@click.pass_context
def scan(ctx: click.Context, snapshot: str, save: bool) -> None:
    """Scan styles and color variables of a document snapshot into a token tree."""
    try:
        source = SnapshotSource.from_file(snapshot)
        tokens = scan_all_tokens(source)
        if save:
            _storage(ctx, source.file_key).save_tokens(tokens)
            logger.info(f"Saved {tokens.total_tokens} tokens")
    except TokenKitError as e:
        _fail(e)

    click.echo(json.dumps(tokens.to_dict(), indent=2, ensure_ascii=False))


@cli.command()
@click.argument("snapshot", type=click.Path())
@click.pass_context
def collections(ctx: click.Context, snapshot: str) -> None:
    """List variable collections with their modes."""
    try:
        data = get_lite_collections(SnapshotSource.from_file(snapshot))
    except TokenKitError as e:
        _fail(e)

    if not data.collections:
        click.echo("No variable collections found")
        return

    for collection in data.collections:
        modes = ", ".join(m.name for m in collection.modes)
        click.echo(
            f"{collection.id}  {collection.name}  "
            f"({len(collection.variable_ids)} variables; modes: {modes})"
        )


@cli.command()
@click.argument("snapshot", type=click.Path())
@click.argument("collection_id")
@click.pass_context
def detail(ctx: click.Context, snapshot: str, collection_id: str) -> None:
    """Print the per-mode detail table of a collection as JSON."""
    try:
        result = build_detail(SnapshotSource.from_file(snapshot), collection_id)
    except TokenKitError as e:
        _fail(e)

    click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


@cli.command()
@click.argument("snapshot", type=click.Path())
@click.argument("collection_id")
@click.option(
    "--format", "-f", "export_format",
    type=click.Choice([f.value for f in ExportFormat]),
    help="Export format",
)
@click.option(
    "--alias-mode",
    type=click.Choice([m.value for m in AliasMode]),
    help="Render aliases as references or resolved values",
)
@click.option(
    "--color-format",
    type=click.Choice([c.value for c in ColorFormat]),
    help="Color output format",
)
@click.option("--unit", "unit_format", help="Unit for numeric values (px, rem, em, none, ...)")
@click.option("--base-font-size", type=float, help="Base font size for rem/em")
@click.option("--mode", "modes", multiple=True, help="Mode name to export (repeatable)")
@click.option(
    "--unit-for", "unit_for", multiple=True, help="Per-variable unit as VARIABLE_ID=UNIT"
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to file")
@click.pass_context
def export(
    ctx: click.Context,
    snapshot: str,
    collection_id: str,
    export_format: str | None,
    alias_mode: str | None,
    color_format: str | None,
    unit_format: str | None,
    base_font_size: float | None,
    modes: tuple[str, ...],
    unit_for: tuple[str, ...],
    output: str | None,
) -> None:
    """Export a collection as CSS, SCSS, JSON or DTCG."""
    overrides: dict[str, Any] = {
        "format": export_format,
        "alias_mode": alias_mode,
        "color_format": color_format,
        "unit_format": unit_format,
        "base_font_size": base_font_size,
        "modes": list(modes) or None,
        "unit_per_variable": _parse_unit_overrides(unit_for),
    }

    try:
        config = load_config(ctx.obj["project"], ctx.obj["config_file"], **overrides)
        result = build_detail(SnapshotSource.from_file(snapshot), collection_id)
        options = config.export.to_options(result.modes)
        if not options.modes:
            click.echo("Warning: no matching modes to export", err=True)
        text = render(result.variables, options, result.name)
    except TokenKitError as e:
        _fail(e)

    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Wrote {options.format_name} export to {output}")
    else:
        click.echo(text)


@cli.group()
def tokens() -> None:
    """Manage the stored token tree."""


@tokens.command("show")
@click.pass_context
def tokens_show(ctx: click.Context) -> None:
    """Print the stored token tree and its metadata."""
    storage = _storage(ctx)
    stored = storage.load_tokens()
    if stored is None:
        click.echo("No tokens found. Run 'tokenkit scan --save' first.")
        return

    metadata = storage.load_metadata()
    click.echo(
        json.dumps(
            {
                "tokens": stored.to_dict(),
                "metadata": metadata.to_dict() if metadata else None,
            },
            indent=2,
            ensure_ascii=False,
        )
    )


@tokens.command("clear")
@click.pass_context
def tokens_clear(ctx: click.Context) -> None:
    """Delete the stored token tree and metadata."""
    try:
        _storage(ctx).clear()
    except TokenKitError as e:
        _fail(e)
    click.echo("Cleared stored tokens")


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
