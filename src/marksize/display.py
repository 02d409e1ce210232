"""Rich terminal display for marksize."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.style import Style
from rich.table import Table
from rich.text import Text

from marksize.models import Classification, LabelStyle, Size, SizeEntry, StatusUpdate

console = Console()

STYLES: dict[str, Style] = {
    LabelStyle.MARKED.value: Style(color="yellow", bold=True),
    Classification.NORMAL.value: Style(color="green"),
    Classification.OVER.value: Style(color="red", bold=True),
}


def format_size(size: Size) -> str:
    """Whole MB as an integer, fractional MB with one decimal."""
    if isinstance(size, float):
        return f"{size:.1f}"
    return str(size)


def format_label(size: Size, width: int = 0) -> str:
    """Inline label text for an entry, right-aligned to width."""
    return format_size(size).rjust(width)


def format_status(total: Size, prefix: Optional[str] = None) -> str:
    """Status indicator text, e.g. 'Marked: 750 MB'."""
    body = f"{format_size(total)} MB"
    return f"{prefix}{body}" if prefix else body


def status_text(update: StatusUpdate) -> Text:
    """Styled rich Text for a status update."""
    return Text(update.text, style=STYLES[update.style.value])


def show_scan_result(entry: SizeEntry) -> None:
    """Display the size of a single scanned path."""
    console.print(f"[bold]{format_size(entry.size)} MB[/bold]  {escape(entry.path)}")


def show_status(update: StatusUpdate) -> None:
    """Display a status line styled by its classification."""
    console.print(status_text(update))
    if update.is_over:
        console.print("[red]Total is over the dead-line[/red]")


def show_labels(labels: list[tuple[str, str]]) -> None:
    """Display (path, label) pairs as a table."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Size (MB)", justify="right", style=STYLES[LabelStyle.MARKED.value])
    table.add_column("Path")

    for path, label in labels:
        table.add_row(label.strip(), path)

    console.print(table)


def show_config(values: dict) -> None:
    """Display effective configuration values."""
    table = Table(title="marksize configuration", show_header=True, header_style="bold")
    table.add_column("Option", style="bold")
    table.add_column("Value")

    for key, value in values.items():
        shown = "[dim]disabled[/dim]" if value is None or value is False else str(value)
        table.add_row(key, shown)

    console.print(table)
