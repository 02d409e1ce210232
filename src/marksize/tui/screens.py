"""TUI screens for marksize."""

from pathlib import Path
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from marksize.display import STYLES
from marksize.models import Classification, ClearScope, LabelStyle
from marksize.tui.widgets import Entry, StatusBar, list_directory

MARK = "[yellow]*[/yellow]"


class BrowserScreen(Screen):
    """Listing of one directory; each screen is one marksize view."""

    BINDINGS = [
        Binding("space", "toggle_mark", "Mark"),
        Binding("u", "clear_marks", "Unmark All"),
        Binding("U", "clear_all_views", "Unmark Everywhere"),
        Binding("backspace", "back", "Up"),
    ]

    def __init__(self, directory: Path):
        super().__init__()
        self.directory = directory
        self.view_id = str(directory)
        self.listing: dict[str, Entry] = {}
        self.marked: list[str] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(f"[bold]{self.directory}[/bold]", id="path-header")
        yield DataTable(id="listing")
        yield StatusBar(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Fill the listing."""
        table = self.query_one("#listing", DataTable)
        table.cursor_type = "row"
        table.add_column("", key="mark")
        table.add_column("Size", key="size")
        table.add_column("Name", key="name")

        for entry in list_directory(self.directory):
            self.listing[entry.path] = entry
            table.add_row("", entry.size_text, entry.name, key=entry.path)

        self.query_one("#status-bar", StatusBar).set_enabled(self.app.controller.enabled)

    def _cursor_entry(self) -> Optional[Entry]:
        table = self.query_one("#listing", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self.listing.get(str(row_key.value))

    def _set_mark_cell(self, path: str, marked: bool) -> None:
        table = self.query_one("#listing", DataTable)
        table.update_cell(path, "mark", MARK if marked else "")

    # Host-side rendering --------------------------------------------------

    def show_label(self, path: str, text: str, style: LabelStyle) -> None:
        table = self.query_one("#listing", DataTable)
        table.update_cell(path, "size", Text(text, style=STYLES[style.value]))

    def remove_label(self, path: str) -> None:
        entry = self.listing.get(path)
        if entry is None:
            return
        table = self.query_one("#listing", DataTable)
        table.update_cell(path, "size", entry.size_text)

    def show_status(self, text: str, style: Classification) -> None:
        self.query_one("#status-bar", StatusBar).show(text, style)

    def size_span(self, path: str) -> Optional[tuple[int, int]]:
        entry = self.listing.get(path)
        if entry is None:
            return None
        return (0, len(entry.size_text))

    def unmark_all(self) -> None:
        for path in self.marked:
            self._set_mark_cell(path, False)
        self.marked.clear()

    # Actions --------------------------------------------------------------

    def action_toggle_mark(self) -> None:
        """Mark or unmark the entry under the cursor."""
        entry = self._cursor_entry()
        if entry is None:
            return

        if entry.path in self.marked:
            self.marked.remove(entry.path)
            self._set_mark_cell(entry.path, False)
        else:
            self.marked.append(entry.path)
            self._set_mark_cell(entry.path, True)

        # Only directories are sized
        if entry.is_dir:
            self.app.dispatch_toggle(self.view_id, entry.path)

        table = self.query_one("#listing", DataTable)
        table.move_cursor(row=table.cursor_row + 1)

    def action_clear_marks(self) -> None:
        """Unmark everything in this directory."""
        self.unmark_all()
        self.app.dispatch_clear(self.view_id, ClearScope.LOCAL)
        self.notify("Cleared marks")

    def action_clear_all_views(self) -> None:
        """Unmark everything in every open directory."""
        for screen in self.app.browser_screens():
            screen.unmark_all()
        self.app.dispatch_clear(self.view_id, ClearScope.GLOBAL)
        self.notify("Cleared marks in all directories")

    def action_back(self) -> None:
        """Close this directory and return to the previous one."""
        self.app.close_browser(self)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open a directory on enter."""
        entry = self.listing.get(str(event.row_key.value))
        if entry is not None and entry.is_dir:
            self.app.open_directory(Path(entry.path))
