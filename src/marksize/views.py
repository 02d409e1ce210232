"""Per-view state and the process-wide registry of touched views."""

from dataclasses import dataclass, field

from marksize.aggregate import SelectionAggregate
from marksize.cache import SizeCache
from marksize.models import Size


@dataclass
class View:
    """State marksize keeps for one listing surface."""

    view_id: str
    cache: SizeCache = field(default_factory=SizeCache)
    aggregate: SelectionAggregate = field(default_factory=SelectionAggregate)
    total: Size = 0
    over: bool = False
    decorations: dict[str, str] = field(default_factory=dict)

    def recompute_total(self) -> Size:
        """Re-derive total from the aggregate."""
        self.total = self.aggregate.sum()
        return self.total

    def clear_selection(self) -> None:
        """Forget the selection but keep cached sizes."""
        self.aggregate.clear()
        self.total = 0
        self.over = False

    def reset(self) -> None:
        """Full reset: selection and cache."""
        self.clear_selection()
        self.cache.clear()


class ViewRegistry:
    """Views touched while the feature was enabled, keyed by view id."""

    def __init__(self):
        self._views: dict[str, View] = {}

    def __contains__(self, view_id: str) -> bool:
        return view_id in self._views

    def __iter__(self):
        return iter(list(self._views.values()))

    def __len__(self) -> int:
        return len(self._views)

    def register(self, view: View) -> None:
        self._views.setdefault(view.view_id, view)

    def discard(self, view_id: str) -> None:
        self._views.pop(view_id, None)

    def clear(self) -> None:
        self._views.clear()
