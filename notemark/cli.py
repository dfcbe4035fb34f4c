"""
Inspect how notemark parses a Markdown note, or export it to HTML.
Parse results are printed as JSON on stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .blocks import parse_blocks
from .config import ConfigError, NotemarkConfig, build_config
from .exceptions import ConversionError, DocumentReadError
from .export import markdown_to_html
from .filesystem import get_max_file_size, normalize_filepath, read_document, write_text_atomic
from .highlight import tokenize
from .inline import parse_inlines
from .serialization import to_json

__all__ = ["cli"]


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr")
@click.option(
    "--parse-task-inlines/--no-parse-task-inlines",
    default=None,
    help="Inline-parse task item text",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool = False, parse_task_inlines: bool | None = None):
    """
    Parse, highlight, and export Markdown notes.

    Args:
        verbose: Enable debug logging.
        parse_task_inlines: Override for the `parse_task_inlines` setting.

    Examples:
        notemark blocks note.md
        notemark --parse-task-inlines blocks todo.md
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"parse_task_inlines": parse_task_inlines}


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def blocks(ctx: click.Context, filepath: str):
    """Print the blocks of FILEPATH as JSON."""
    path, config = _resolve_document(ctx, filepath)
    click.echo(to_json(parse_blocks(_read(path, config), config)))


@cli.command()
@click.argument("text")
@click.pass_context
def inlines(ctx: click.Context, text: str):
    """Print the inline spans of TEXT as JSON."""
    config = _build_config(ctx, Path.cwd())
    click.echo(to_json(parse_inlines(text, config)))


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def tokens(ctx: click.Context, filepath: str):
    """Print the highlight tokens of FILEPATH as JSON."""
    path, config = _resolve_document(ctx, filepath)
    click.echo(to_json(tokenize(_read(path, config), config)))


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write HTML to this file instead of stdout",
)
@click.pass_context
def export(ctx: click.Context, filepath: str, output: Path | None = None):
    """
    Convert FILEPATH to HTML.

    Raises:
        click.ClickException: If the conversion or the write fails.
    """
    path, config = _resolve_document(ctx, filepath)
    text = _read(path, config)

    try:
        html = markdown_to_html(text, config)
    except ConversionError as error:
        raise click.ClickException(str(error)) from error

    if output is None:
        click.echo(html, nl=False)
        return

    try:
        write_text_atomic(output, html, warn=lambda message: click.echo(message, err=True))
    except IOError as error:
        raise click.ClickException(str(error)) from error


def _build_config(ctx: click.Context, search_path: Path) -> NotemarkConfig:
    overrides = (ctx.obj or {}).get("overrides", {})
    try:
        return build_config(search_path, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error


def _resolve_document(ctx: click.Context, filepath: str) -> tuple[Path, NotemarkConfig]:
    base_dir = Path.cwd().resolve()
    try:
        path = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    return path, _build_config(ctx, path.parent)


def _read(path: Path, config: NotemarkConfig) -> str:
    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        return read_document(path, max_file_size)
    except DocumentReadError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
