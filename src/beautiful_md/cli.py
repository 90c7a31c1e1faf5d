"""Click CLI for beautiful-md: format markdown files."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from beautiful_md.config.defaults import CONFIG_FILE_NAME, DEFAULT_MAX_WORKERS
from beautiful_md.config.hierarchy import load_config_hierarchy, parse_override
from beautiful_md.config.schema import Config
from beautiful_md.diagnostics import Diagnostics
from beautiful_md.errors.exceptions import BeautifulMdError
from beautiful_md.types import Severity

_SEVERITY_STYLES = {
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


class _State:
    """Per-invocation settings shared by every command."""

    def __init__(self, config: Config, no_color: bool) -> None:
        self.config = config
        self.console = Console(no_color=no_color, highlight=False, emoji=False)
        self.error_console = Console(stderr=True, no_color=no_color, highlight=False, emoji=False)


def _setup_logging(verbosity: int, console: Console) -> None:
    """Configure logging based on verbosity level."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


def _print_diagnostics(console: Console, path: Path | None, diagnostics: Diagnostics) -> None:
    if not diagnostics:
        return
    header = f"{len(diagnostics)} issues found"
    if path is not None:
        header += f" in {escape(str(path))}"
    console.print(f"[bold]{header}:[/bold]", soft_wrap=True)
    for d in diagnostics:
        style = _SEVERITY_STYLES[d.severity]
        console.print(
            f"{d.icon} [dim]Line {d.line}:[/dim] [{style}]{escape(d.message)}[/{style}]",
            soft_wrap=True,
        )
        if d.snippet is not None:
            console.print(f"  [dim]│ {escape(d.snippet)}[/dim]", soft_wrap=True)


def _expand(files: tuple[str, ...], use_glob: bool) -> list[Path]:
    from beautiful_md.core import expand_globs

    if use_glob:
        return expand_globs(list(files))
    return [Path(f) for f in files]


@click.group()
@click.version_option(package_name="beautiful-md")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Configuration file (YAML).",
)
@click.option(
    "-s",
    "--set",
    "overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Override one configuration value, e.g. tables.padding=2.",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    overrides: tuple[str, ...],
    no_color: bool,
    verbose: int,
) -> None:
    """Format and check markdown files."""
    error_console = Console(stderr=True, no_color=no_color, highlight=False, emoji=False)
    _setup_logging(verbose, error_console)

    try:
        parsed = dict(parse_override(item) for item in overrides)
        config = load_config_hierarchy(config_path, overrides=parsed)
    except BeautifulMdError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}", soft_wrap=True)
        sys.exit(1)

    ctx.obj = _State(config, no_color)


@cli.command("format")
@click.argument("files", nargs=-1, required=True)
@click.option("-i", "--in-place", is_flag=True, default=False, help="Rewrite files in place.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output file path.")
@click.option("--glob", "use_glob", is_flag=True, default=False, help="Treat FILES as glob patterns.")
@click.option(
    "--dry-run", is_flag=True, default=False, help="Report what would change without writing."
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_WORKERS,
    show_default=True,
    help="Concurrent workers for in-place formatting.",
)
@click.pass_obj
def format_command(
    state: _State,
    files: tuple[str, ...],
    in_place: bool,
    output: str | None,
    use_glob: bool,
    dry_run: bool,
    workers: int,
) -> None:
    """Format markdown file(s)."""
    try:
        paths = _expand(files, use_glob)
    except BeautifulMdError as e:
        state.error_console.print(f"[red]Error:[/red] {escape(e.message)}", soft_wrap=True)
        sys.exit(1)

    if output and len(paths) > 1:
        raise click.UsageError("--output can only be used with a single input file")
    if output and in_place:
        raise click.UsageError("--output and --in-place are mutually exclusive")

    if in_place or dry_run:
        _format_batch(state, paths, workers, write=not dry_run)
    else:
        _format_to_stream(state, paths, output)


def _format_to_stream(state: _State, paths: list[Path], output: str | None) -> None:
    """Format each file to stdout, or to ``output`` for a single file."""
    from beautiful_md.core import format_markdown, read_markdown, write_markdown

    failed = False
    for path in paths:
        try:
            formatted, diagnostics = format_markdown(read_markdown(path), state.config)
        except BeautifulMdError as e:
            state.error_console.print(f"[red]Error:[/red] {escape(e.message)}", soft_wrap=True)
            failed = True
            continue

        _print_diagnostics(state.error_console, path, diagnostics)
        if output:
            try:
                write_markdown(output, formatted)
            except BeautifulMdError as e:
                state.error_console.print(
                    f"[red]Error:[/red] {escape(e.message)}", soft_wrap=True
                )
                sys.exit(1)
            state.error_console.print(f"[green]Written to {escape(output)}[/green]")
        else:
            click.echo(formatted, nl=False)

    if failed:
        sys.exit(1)


def _format_batch(state: _State, paths: list[Path], workers: int, write: bool) -> None:
    from beautiful_md.core import format_files

    outcomes = format_files(paths, state.config, max_workers=workers, write=write)

    changed = 0
    failed = 0
    for outcome in outcomes:
        if not outcome.ok:
            failed += 1
            state.error_console.print(
                f"[red]Error:[/red] {escape(str(outcome.path))}: {escape(outcome.error or '')}",
                soft_wrap=True,
            )
            continue
        _print_diagnostics(state.error_console, outcome.path, outcome.diagnostics)
        if outcome.changed:
            changed += 1
            verb = "Formatted" if write else "Would format"
            state.console.print(f"{verb} {escape(str(outcome.path))}", soft_wrap=True)

    verb = "formatted" if write else "would be formatted"
    state.console.print(f"[green]{changed} of {len(outcomes)} file(s) {verb}[/green]")
    if failed:
        sys.exit(1)


@cli.command("check")
@click.argument("files", nargs=-1, required=True)
@click.option("--glob", "use_glob", is_flag=True, default=False, help="Treat FILES as glob patterns.")
@click.pass_obj
def check_command(state: _State, files: tuple[str, ...], use_glob: bool) -> None:
    """Check whether files are formatted; exit 1 if any need formatting."""
    from beautiful_md.core import format_files

    try:
        paths = _expand(files, use_glob)
    except BeautifulMdError as e:
        state.error_console.print(f"[red]Error:[/red] {escape(e.message)}", soft_wrap=True)
        sys.exit(1)

    outcomes = format_files(paths, state.config, write=False)

    needs_formatting = [o for o in outcomes if o.ok and o.changed]
    errors = [o for o in outcomes if not o.ok]

    for outcome in errors:
        state.error_console.print(
            f"[red]Error:[/red] {escape(str(outcome.path))}: {escape(outcome.error or '')}",
            soft_wrap=True,
        )
    for outcome in needs_formatting:
        state.console.print(
            f"[yellow]Needs formatting:[/yellow] {escape(str(outcome.path))}", soft_wrap=True
        )

    if needs_formatting or errors:
        sys.exit(1)
    state.console.print(f"[green]All {len(outcomes)} file(s) are formatted[/green]")


@cli.command("config")
@click.argument("output", type=click.Path(dir_okay=False), default=CONFIG_FILE_NAME)
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
@click.pass_obj
def config_command(state: _State, output: str, force: bool) -> None:
    """Write the effective configuration to OUTPUT as YAML."""
    from beautiful_md.config.loader import save_config

    if Path(output).exists() and not force:
        state.error_console.print(
            f"[red]Error:[/red] {escape(output)} already exists (use --force to overwrite)",
            soft_wrap=True,
        )
        sys.exit(1)

    try:
        written = save_config(state.config, output)
    except BeautifulMdError as e:
        state.error_console.print(f"[red]Error:[/red] {escape(e.message)}", soft_wrap=True)
        sys.exit(1)
    state.console.print(f"[green]Wrote configuration to {escape(str(written))}[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
