"""Custom widgets for the marksize TUI."""

import os
from dataclasses import dataclass
from pathlib import Path

from rich.text import Text
from textual.widgets import Static

from marksize.display import STYLES
from marksize.models import Classification


@dataclass
class Entry:
    """One line of a directory listing."""

    path: str
    name: str
    is_dir: bool
    size_text: str


def list_directory(directory: Path) -> list[Entry]:
    """Entries of directory, directories first, each group sorted by name."""
    entries = []
    try:
        with os.scandir(directory) as it:
            for item in it:
                try:
                    is_dir = item.is_dir(follow_symlinks=False)
                    size = item.stat(follow_symlinks=False).st_size
                except OSError:
                    is_dir, size = False, 0
                name = f"{item.name}/" if is_dir else item.name
                entries.append(Entry(item.path, name, is_dir, str(size)))
    except OSError:
        return []

    entries.sort(key=lambda e: (not e.is_dir, e.name.lower()))
    return entries


class StatusBar(Static):
    """Persistent total for the marked directories of a view."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._enabled = False
        self._status_text = ""
        self._status_style = Classification.NORMAL

    def show(self, text: str, style: Classification) -> None:
        """Update with a new status from the controller."""
        self._status_text = text
        self._status_style = style
        self._redraw()

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        self._redraw()

    def _redraw(self) -> None:
        if not self._enabled:
            self.update(Text("Sizes off (press e)", style="dim"))
            return

        line = Text(self._status_text or "0 MB", style=STYLES[self._status_style.value])
        if self._status_style == Classification.OVER:
            line.append("  over dead-line", style="red")
        self.update(line)
