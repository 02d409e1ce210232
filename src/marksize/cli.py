"""CLI interface for marksize."""

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from marksize import __version__
from marksize.cache import normalize_path
from marksize.config import ConfigError, MarkSizeConfig, load_config
from marksize.controller import Controller
from marksize.display import console, show_config, show_labels, show_scan_result, show_status
from marksize.host import RecordingHost
from marksize.log import setup_logger
from marksize.models import SizeEntry
from marksize.scanner import scan

OVER_LIMIT_EXIT_CODE = 2

# Create Typer app
app = typer.Typer(
    name="marksize",
    help="Running size totals for marked directories",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"marksize version {__version__}")
        raise typer.Exit()


def _load(config_path: Optional[Path], **overrides) -> MarkSizeConfig:
    try:
        return load_config(config_path).with_overrides(**overrides)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also log to this file."),
) -> None:
    """marksize - size up marked directories before cleanup."""
    setup_logger(logging.DEBUG if verbose else logging.WARNING, log_file=log_file)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command(name="scan")
def scan_command(
    path: Path = typer.Argument(..., help="Directory or file to measure"),
    filename_filter: Optional[str] = typer.Option(
        None, "--filter", "-f", help="Only count files whose name matches this regex"
    ),
    precise: bool = typer.Option(False, "--precise", help="Keep fractional MB"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Config file to use"),
) -> None:
    """Show the size in MB of a single path."""
    config = _load(config_path, filename_filter=filename_filter, precise=precise or None)
    size = scan(path, config.filename_filter, config.precise)
    show_scan_result(SizeEntry(path=normalize_path(path), size=size))


@app.command()
def total(
    paths: list[Path] = typer.Argument(..., help="Directories to mark, in order"),
    filename_filter: Optional[str] = typer.Option(
        None, "--filter", "-f", help="Only count files whose name matches this regex"
    ),
    dead_line: Optional[float] = typer.Option(
        None, "--dead-line", help="Flag totals above this many MB"
    ),
    no_dead_line: bool = typer.Option(False, "--no-dead-line", help="Never flag the total"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Text before the total"),
    precise: bool = typer.Option(False, "--precise", help="Keep fractional MB"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Config file to use"),
) -> None:
    """Mark each directory in turn and show the running total.

    Naming a directory twice unmarks it again. Exits with code 2 when the
    final total is over the dead-line.
    """
    if dead_line is not None and dead_line.is_integer():
        dead_line = int(dead_line)
    config = _load(
        config_path,
        filename_filter=filename_filter,
        dead_line=False if no_dead_line else dead_line,
        status_prefix=prefix,
        precise=precise or None,
    )

    host = RecordingHost(view_id="cli")
    controller = Controller(host, config)
    controller.enable()

    for path in paths:
        if not path.is_dir():
            console.print(f"[yellow]Not a directory, skipping:[/yellow] {escape(str(path))}")
            continue
        host.toggle(normalize_path(path))

    view = controller.view(host.view_id)
    labels = [
        (path, host.label_text(path) or "")
        for path in view.aggregate.paths()
    ]
    if labels:
        show_labels(labels)

    update = controller.refresh_status(host.view_id)
    show_status(update)

    if update.is_over:
        raise typer.Exit(OVER_LIMIT_EXIT_CODE)


@app.command()
def browse(
    path: Path = typer.Argument(Path("."), help="Directory to start browsing in"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Config file to use"),
) -> None:
    """Launch the interactive directory browser."""
    config = _load(config_path)
    try:
        from marksize.tui import run_tui
    except ImportError:
        console.print("[red]TUI not available.[/red]")
        console.print("Install with: [bold]pip install marksize[tui][/bold]")
        raise typer.Exit(1)

    run_tui(Path(os.path.abspath(path)), config)


@app.command(name="config")
def config_command(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Config file to use"),
) -> None:
    """Show the effective configuration."""
    config = _load(config_path)
    show_config(config.model_dump())


if __name__ == "__main__":
    app()
