"""Tests for the TUI host."""

import asyncio

from conftest import MB, make_file
from marksize.config import MarkSizeConfig
from marksize.models import Classification
from marksize.tui import MarkSizeApp
from marksize.tui.screens import BrowserScreen
from marksize.tui.widgets import list_directory


class TestListDirectory:
    def test_directories_first(self, tmp_path):
        (tmp_path / "zeta").mkdir()
        (tmp_path / "alpha.txt").write_text("hi")
        (tmp_path / "beta").mkdir()

        names = [e.name for e in list_directory(tmp_path)]
        assert names == ["beta/", "zeta/", "alpha.txt"]

    def test_size_text_is_byte_size(self, tmp_path):
        (tmp_path / "f.txt").write_text("12345")
        [entry] = list_directory(tmp_path)
        assert entry.size_text == "5"
        assert not entry.is_dir

    def test_missing_directory(self, tmp_path):
        assert list_directory(tmp_path / "nope") == []


def run_app(start, actions, config=None):
    """Run the app headless, apply actions to the top screen, return state."""

    async def _run():
        app = MarkSizeApp(start, config)
        async with app.run_test() as pilot:
            await pilot.pause()
            screen = app.screen
            for action in actions:
                action(app, screen)
                await pilot.pause()
            view = app.controller.view(screen.view_id)
            return {
                "screen": screen,
                "total": view.total,
                "over": view.over,
                "enabled": app.controller.enabled,
                "marked": list(screen.marked),
                "cached": len(view.cache),
            }

    return asyncio.run(_run())


def toggle(app, screen):
    screen.action_toggle_mark()


class TestMarkSizeApp:
    def test_opens_start_directory(self, sized_dirs, tmp_path):
        state = run_app(tmp_path, [])
        assert isinstance(state["screen"], BrowserScreen)
        assert state["enabled"]
        assert set(state["screen"].listing) == set(sized_dirs.values())

    def test_marking_adds_sizes(self, sized_dirs, tmp_path):
        state = run_app(tmp_path, [toggle, toggle])
        assert state["marked"] == [sized_dirs["a"], sized_dirs["b"]]
        assert state["total"] == 600
        assert not state["over"]

    def test_three_marks_go_over(self, sized_dirs, tmp_path):
        state = run_app(tmp_path, [toggle, toggle, toggle])
        assert state["total"] == 800
        assert state["over"]

    def test_files_are_marked_but_not_sized(self, tmp_path):
        make_file(tmp_path / "loose.bin", 900 * MB)
        state = run_app(tmp_path, [toggle])
        assert state["marked"] == [str(tmp_path / "loose.bin")]
        assert state["total"] == 0

    def test_clear_marks(self, sized_dirs, tmp_path):
        def clear(app, screen):
            screen.action_clear_marks()

        state = run_app(tmp_path, [toggle, toggle, clear])
        assert state["marked"] == []
        assert state["total"] == 0
        assert state["cached"] == 2

    def test_disable_clears_total(self, sized_dirs, tmp_path):
        def switch(app, screen):
            app.action_toggle_feature()

        state = run_app(tmp_path, [toggle, switch])
        assert not state["enabled"]
        assert state["total"] == 0

    def test_reenable_counts_existing_marks(self, sized_dirs, tmp_path):
        def switch(app, screen):
            app.action_toggle_feature()

        state = run_app(tmp_path, [toggle, toggle, switch, switch])
        assert state["enabled"]
        assert state["total"] == 600

    def test_status_bar_style(self, sized_dirs, tmp_path):
        def check(app, screen):
            bar = screen.query_one("#status-bar")
            assert bar._status_style == Classification.OVER
            assert bar._status_text == "Total: 800 MB"

        run_app(tmp_path, [toggle, toggle, toggle, check], MarkSizeConfig(status_prefix="Total: "))
