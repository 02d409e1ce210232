"""Wiring between host selection events and the size engine."""

import logging
from typing import Optional

from marksize.cache import normalize_path
from marksize.classifier import classify
from marksize.config import MarkSizeConfig
from marksize.display import format_label, format_status
from marksize.host import Host
from marksize.models import Classification, ClearScope, ControllerState, LabelStyle, StatusUpdate
from marksize.views import View, ViewRegistry

logger = logging.getLogger(__name__)


class Controller:
    """
    Keeps each view's running total in step with the host's marks.

    The controller is either enabled or disabled. While enabled it is
    subscribed to the host and every selection toggle on a directory
    updates that view's cache, aggregate, inline label and status.
    Scans run synchronously: a large tree blocks the caller until the
    walk completes.
    """

    def __init__(self, host: Host, config: Optional[MarkSizeConfig] = None):
        self.host = host
        self.config = config or MarkSizeConfig()
        self.state = ControllerState.DISABLED
        self.registry = ViewRegistry()
        self._views: dict[str, View] = {}

    @property
    def enabled(self) -> bool:
        return self.state == ControllerState.ENABLED

    def view(self, view_id: str) -> View:
        """The View for view_id, created on first use."""
        if view_id not in self._views:
            self._views[view_id] = View(view_id=view_id)
        return self._views[view_id]

    def get_view(self, view_id: str) -> Optional[View]:
        return self._views.get(view_id)

    # Lifecycle ------------------------------------------------------------

    def enable(self) -> None:
        """Subscribe to the host and account for directories already marked."""
        if self.enabled:
            return
        self.state = ControllerState.ENABLED
        self.host.subscribe(self)
        logger.info("marksize enabled")

        view_id = self.host.active_view()
        if view_id is None:
            return
        for path in self.host.selected_directories(view_id):
            self.on_selection_toggled(view_id, path)

    def disable(self) -> None:
        """Clear every registered view's selection and unsubscribe."""
        if not self.enabled:
            return
        for view in self.registry:
            self._clear_view(view)
        self.registry.clear()
        self.host.unsubscribe(self)
        self.state = ControllerState.DISABLED
        logger.info("marksize disabled")

    on_feature_enabled = enable
    on_feature_disabled = disable

    def close_view(self, view_id: str) -> None:
        """Forget a view the host has closed."""
        self.registry.discard(view_id)
        self._views.pop(view_id, None)

    # Host events ----------------------------------------------------------

    def on_selection_toggled(self, view_id: str, path: str) -> Optional[StatusUpdate]:
        """
        Handle a mark/unmark of the directory at path in view_id.

        Returns:
            The status the view was updated to, or None while disabled
        """
        if not self.enabled:
            return None

        view = self.view(view_id)
        key = normalize_path(path)

        if key in view.decorations:
            self.host.remove_inline_label(view_id, path)
            del view.decorations[key]

        size = view.cache.lookup_or_compute(
            key, self.config.filename_filter, self.config.precise
        )
        selected = view.aggregate.toggle(key, size)
        self.registry.register(view)

        if selected:
            self._render_label(view, path, size)

        return self._update_status(view)

    def on_clear_selection(self, view_id: str, scope: ClearScope = ClearScope.LOCAL) -> None:
        """Drop the selection of one view, or of every registered view."""
        if not self.enabled:
            return

        if ClearScope(scope) == ClearScope.GLOBAL:
            for view in self.registry:
                self._clear_view(view)
            self.registry.clear()
            return

        view = self.get_view(view_id)
        if view is not None:
            self._clear_view(view)

    def refresh_status(self, view_id: str) -> StatusUpdate:
        """Recompute and re-render the status of a view."""
        return self._update_status(self.view(view_id))

    def reset_view(self, view_id: str) -> None:
        """Clear the selection and the cached sizes of a view."""
        view = self.get_view(view_id)
        if view is None:
            return
        self._clear_view(view)
        view.cache.clear()

    # Internals ------------------------------------------------------------

    def _render_label(self, view: View, path: str, size) -> None:
        span = self.host.locate_size_column(view.view_id, path)
        if span is None:
            logger.debug("No size column for %s, label skipped", path)
            return
        start, end = span
        text = format_label(size, end - start)
        self.host.render_inline_label(view.view_id, path, text, LabelStyle.MARKED)
        view.decorations[normalize_path(path)] = path

    def _update_status(self, view: View) -> StatusUpdate:
        total = view.recompute_total()
        style = classify(total, self.config.dead_line)
        view.over = style == Classification.OVER
        update = StatusUpdate(
            view_id=view.view_id,
            total=total,
            text=format_status(total, self.config.status_prefix),
            style=style,
        )
        self.host.render_status(view.view_id, update.text, update.style)
        return update

    def _clear_view(self, view: View) -> None:
        for path in list(view.decorations.values()):
            self.host.remove_inline_label(view.view_id, path)
        view.decorations.clear()
        view.clear_selection()
        self._update_status(view)
