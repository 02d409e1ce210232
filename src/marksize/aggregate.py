"""Running total of the directories currently selected in a view."""

from marksize.cache import normalize_path
from marksize.models import Size, SizeEntry


class SelectionAggregate:
    """Selected path -> size, with the sum always derived from the entries."""

    def __init__(self):
        self._entries: dict[str, Size] = {}

    def __contains__(self, path) -> bool:
        return normalize_path(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def toggle(self, path, size: Size) -> bool:
        """
        Add path if absent, remove it if present.

        Returns:
            True if path is selected after the call
        """
        key = normalize_path(path)
        if key in self._entries:
            del self._entries[key]
            return False
        self._entries[key] = size
        return True

    def sum(self) -> Size:
        """Total size of all selected entries (0 when empty)."""
        return sum(self._entries.values())

    def items(self) -> list[SizeEntry]:
        return [SizeEntry(path=p, size=s) for p, s in self._entries.items()]

    def paths(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
