"""The narrow interface between marksize and a host listing UI."""

import re
from collections import defaultdict
from typing import TYPE_CHECKING, Optional, Protocol

from marksize.models import Classification, ClearScope, LabelStyle

if TYPE_CHECKING:
    from marksize.controller import Controller

Span = tuple[int, int]

# Permissions, link count, owner, optional group, then the size field,
# followed by either "Mon DD" or an ISO date.
_LS_SIZE_RE = re.compile(
    r"^\s*[-bcdlpsD][-rwxsStT]{9}[.+@]?\s+\d+\s+\S+\s+(?:\S+\s+)?"
    r"(?P<size>\d[\d.,]*[kKMGTPEZY]?)"
    r"\s+(?=[A-Za-z]{3}\s+\d|\d{4}-\d{2}-\d{2})"
)


def find_size_column(line: str) -> Optional[Span]:
    """
    Locate the size field of an ``ls -l`` style listing line.

    Returns:
        (start, end) offsets of the size text, or None if the line
        does not look like a long listing entry
    """
    match = _LS_SIZE_RE.match(line)
    if not match:
        return None
    return match.span("size")


class Host(Protocol):
    """Calls marksize makes into the host listing UI."""

    def render_inline_label(self, view_id: str, path: str, text: str, style: LabelStyle) -> None:
        """Show text at the entry's size column, replacing any prior label."""

    def remove_inline_label(self, view_id: str, path: str) -> None:
        """Remove the label previously rendered for path."""

    def render_status(self, view_id: str, text: str, style: Classification) -> None:
        """Update the view's persistent status indicator."""

    def locate_size_column(self, view_id: str, path: str) -> Optional[Span]:
        """Where the entry's native size text sits, or None if not found."""

    def subscribe(self, controller: "Controller") -> None:
        """Start delivering selection-toggle and clear events to controller."""

    def unsubscribe(self, controller: "Controller") -> None:
        """Stop delivering events to controller."""

    def active_view(self) -> Optional[str]:
        """Id of the view the user is currently in."""

    def selected_directories(self, view_id: str) -> list[str]:
        """Directories already selected in view_id."""


class RecordingHost:
    """
    In-memory host that records what marksize renders.

    Selection toggles go through toggle(), which keeps the host's own
    notion of selected directories and forwards the event to the
    subscribed controller, if any.
    """

    def __init__(self, view_id: str = "main", column_width: int = 8):
        self.view_id = view_id
        self.column_width = column_width
        self.controller: Optional["Controller"] = None
        self.labels: dict[tuple[str, str], tuple[str, LabelStyle]] = {}
        self.status: dict[str, tuple[str, Classification]] = {}
        self.lines: dict[tuple[str, str], str] = {}
        self.selected: defaultdict[str, list[str]] = defaultdict(list)
        self.calls: list[tuple] = []

    # Outbound calls -------------------------------------------------------

    def render_inline_label(self, view_id, path, text, style):
        self.calls.append(("render_inline_label", view_id, path, text, style))
        self.labels[(view_id, path)] = (text, style)

    def remove_inline_label(self, view_id, path):
        self.calls.append(("remove_inline_label", view_id, path))
        self.labels.pop((view_id, path), None)

    def render_status(self, view_id, text, style):
        self.calls.append(("render_status", view_id, text, style))
        self.status[view_id] = (text, style)

    def locate_size_column(self, view_id, path):
        line = self.lines.get((view_id, path))
        if line is not None:
            return find_size_column(line)
        return (0, self.column_width)

    def subscribe(self, controller):
        self.controller = controller

    def unsubscribe(self, controller):
        if self.controller is controller:
            self.controller = None

    def active_view(self):
        return self.view_id

    def selected_directories(self, view_id):
        return list(self.selected[view_id])

    # Host-side user actions ----------------------------------------------

    def toggle(self, path: str, view_id: Optional[str] = None) -> None:
        """Mark or unmark a directory, as the user would."""
        view_id = view_id or self.view_id
        marks = self.selected[view_id]
        if path in marks:
            marks.remove(path)
        else:
            marks.append(path)
        if self.controller is not None:
            self.controller.on_selection_toggled(view_id, path)

    def clear(self, view_id: Optional[str] = None, scope: ClearScope = ClearScope.LOCAL) -> None:
        """Unmark everything, locally or in every view."""
        view_id = view_id or self.view_id
        if scope == ClearScope.GLOBAL:
            self.selected.clear()
        else:
            self.selected.pop(view_id, None)
        if self.controller is not None:
            self.controller.on_clear_selection(view_id, scope)

    def label_text(self, path: str, view_id: Optional[str] = None) -> Optional[str]:
        label = self.labels.get((view_id or self.view_id, path))
        return label[0] if label else None
