"""CLI entry point for d2-fence."""

import json
import logging
import sys
from collections.abc import Callable

import click

from d2_fence.config import Configuration
from d2_fence.generator import EXECUTABLE_ENV, build_args
from d2_fence.markdown import render_markdown
from d2_fence.merge import parse_config
from d2_fence.syntax.scanner import strip_comments
from d2_fence.types import FileType, Layout, Theme, lookup_file_type, lookup_layout


def _read_input(input: str | None) -> str:
    if input in (None, "-"):
        return sys.stdin.read()
    try:
        with open(input, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        click.echo(f"error: cannot read '{input}': {e}", err=True)
        sys.exit(1)


def _write_output(output: str | None, text: str) -> None:
    if not output:
        click.echo(text, nl=False)
        return
    try:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        click.echo(f"error: cannot write '{output}': {e}", err=True)
        sys.exit(1)


def _config_options(command: Callable) -> Callable:
    """Options that become the default configuration of every block."""
    options = [
        click.option(
            "--layout",
            type=click.Choice([layout.value for layout in Layout], case_sensitive=False),
            default=None,
            help="Layout engine",
        ),
        click.option("--theme", type=int, default=None, help="Theme ID"),
        click.option("--dark-theme", "dark_theme", type=int, default=None, help="Theme ID for dark mode"),
        click.option("--pad", type=int, default=None, help="Pixels padded around the diagram"),
        click.option("--sketch", is_flag=True, help="Render as if sketched by hand"),
        click.option("--center", is_flag=True, help="Center the SVG in its viewbox"),
        click.option(
            "--stdout-format",
            "stdout_format",
            type=click.Choice([file_type.value for file_type in FileType], case_sensitive=False),
            default=None,
            help="Image file type",
        ),
        click.option("--directory", type=str, default=None, help="Directory for rendered images"),
        click.option("--only-marked", "only_marked", is_flag=True, help="Only convert fences marked with :image"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _default_config(
    layout: str | None,
    theme: int | None,
    dark_theme: int | None,
    pad: int | None,
    sketch: bool,
    center: bool,
    stdout_format: str | None,
    directory: str | None,
    only_marked: bool,
) -> Configuration:
    return Configuration(
        layout=lookup_layout(layout) if layout else None,
        theme=theme,
        dark_theme=dark_theme,
        pad=pad,
        sketch=True if sketch else None,
        center=True if center else None,
        stdout_format=lookup_file_type(stdout_format) if stdout_format else None,
        directory=directory,
        only_convert_marked_image=True if only_marked else None,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool) -> None:
    """D2 diagram blocks to rendered images."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True, allow_dash=True))
def strip(input: str | None) -> None:
    """Print D2 source with all comments removed."""
    click.echo(strip_comments(_read_input(input)), nl=False)


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True, allow_dash=True))
@_config_options
def inspect(input: str | None, **options) -> None:
    """Print the resolved configuration of one diagram block as JSON."""
    parsed = parse_config(_read_input(input), _default_config(**options))
    report = {
        "config": parsed.config.to_dict(),
        "args": build_args(parsed.config),
        "code": parsed.code,
    }
    click.echo(json.dumps(report, indent=2))


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True, allow_dash=True))
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--d2-bin", "d2_bin", envvar=EXECUTABLE_ENV, default=None, help="Path to the d2 executable")
@_config_options
def render(input: str | None, output: str | None, d2_bin: str | None, **options) -> None:
    """Render every D2 fence of a Markdown document."""
    text = _read_input(input)
    _write_output(output, render_markdown(text, _default_config(**options), d2_bin))


@main.command()
def themes() -> None:
    """List the built-in theme IDs."""
    for theme in Theme:
        click.echo(f"{theme.value:>4}  {theme.name.lower()}")


if __name__ == "__main__":
    main()
