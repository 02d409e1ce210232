"""Main TUI application for marksize."""

from pathlib import Path
from typing import Optional

from textual.app import App
from textual.binding import Binding

from marksize.config import MarkSizeConfig
from marksize.controller import Controller
from marksize.models import Classification, ClearScope, LabelStyle
from marksize.tui.screens import BrowserScreen
from marksize.tui.widgets import StatusBar


class MarkSizeApp(App):
    """Directory browser that acts as the marksize host."""

    TITLE = "marksize"
    SUB_TITLE = "Size up marked directories"

    CSS = """
    #path-header {
        height: 1;
        padding: 0 1;
    }
    #listing {
        height: 1fr;
    }
    #status-bar {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("e", "toggle_feature", "Sizes On/Off"),
        Binding("?", "help", "Help"),
    ]

    def __init__(self, start: Path, config: Optional[MarkSizeConfig] = None):
        super().__init__()
        config = config or MarkSizeConfig()
        if config.status_prefix is None:
            config = config.with_overrides(status_prefix="Marked: ")
        self.start = start
        self.controller = Controller(self, config)
        self.subscriber: Optional[Controller] = None

    def on_mount(self) -> None:
        """Open the start directory with sizes enabled."""
        self.controller.enable()
        self.push_screen(BrowserScreen(self.start))

    def browser_screens(self) -> list[BrowserScreen]:
        return [s for s in self.screen_stack if isinstance(s, BrowserScreen)]

    def _browser(self, view_id: str) -> Optional[BrowserScreen]:
        for screen in self.browser_screens():
            if screen.view_id == view_id:
                return screen
        return None

    def open_directory(self, directory: Path) -> None:
        self.push_screen(BrowserScreen(directory))

    def close_browser(self, screen: BrowserScreen) -> None:
        """Pop a directory screen; the last one stays open."""
        if len(self.browser_screens()) <= 1:
            return
        self.controller.close_view(screen.view_id)
        self.pop_screen()

    # Events towards the controller ----------------------------------------

    def dispatch_toggle(self, view_id: str, path: str) -> None:
        if self.subscriber is not None:
            self.subscriber.on_selection_toggled(view_id, path)

    def dispatch_clear(self, view_id: str, scope: ClearScope) -> None:
        if self.subscriber is not None:
            self.subscriber.on_clear_selection(view_id, scope)

    # Host interface --------------------------------------------------------

    def render_inline_label(self, view_id: str, path: str, text: str, style: LabelStyle) -> None:
        screen = self._browser(view_id)
        if screen is not None:
            screen.show_label(path, text, style)

    def remove_inline_label(self, view_id: str, path: str) -> None:
        screen = self._browser(view_id)
        if screen is not None:
            screen.remove_label(path)

    def render_status(self, view_id: str, text: str, style: Classification) -> None:
        screen = self._browser(view_id)
        if screen is not None:
            screen.show_status(text, style)

    def locate_size_column(self, view_id: str, path: str) -> Optional[tuple[int, int]]:
        screen = self._browser(view_id)
        if screen is None:
            return None
        return screen.size_span(path)

    def subscribe(self, controller: Controller) -> None:
        self.subscriber = controller

    def unsubscribe(self, controller: Controller) -> None:
        if self.subscriber is controller:
            self.subscriber = None

    def active_view(self) -> Optional[str]:
        screens = self.browser_screens()
        return screens[-1].view_id if screens else None

    def selected_directories(self, view_id: str) -> list[str]:
        screen = self._browser(view_id)
        if screen is None:
            return []
        return [p for p in screen.marked if screen.listing[p].is_dir]

    # Actions ----------------------------------------------------------------

    def action_toggle_feature(self) -> None:
        """Turn size tracking on or off."""
        if self.controller.enabled:
            self.controller.disable()
        else:
            self.controller.enable()

        for screen in self.browser_screens():
            screen.query_one("#status-bar", StatusBar).set_enabled(self.controller.enabled)

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "Space marks a directory and adds its size, u/U unmark, Enter opens, e toggles sizes",
            title="Help",
            timeout=5,
        )


def run_tui(start: Path, config: Optional[MarkSizeConfig] = None) -> None:
    """Run the interactive browser.

    Args:
        start: Directory to open first
        config: Options for the size engine
    """
    app = MarkSizeApp(start, config)
    app.run()
