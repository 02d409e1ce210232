"""Interactive directory browser for marksize."""

from marksize.tui.app import MarkSizeApp, run_tui

__all__ = ["MarkSizeApp", "run_tui"]
