"""Per-view memoization of directory sizes."""

import logging
import os
from typing import Callable

from marksize.models import Size, SizeEntry
from marksize.scanner import FilenameFilter, scan

logger = logging.getLogger(__name__)


def normalize_path(path) -> str:
    """Absolute string form of a path, used as cache and aggregate key."""
    return os.path.abspath(os.fspath(path))


class SizeCache:
    """
    Sizes already computed for one view.

    Entries are never evicted: they live until clear() is called, and a
    second store for the same path keeps the first value.
    """

    def __init__(self, scanner: Callable[..., Size] = scan):
        self._sizes: dict[str, Size] = {}
        self._scanner = scanner

    def __contains__(self, path) -> bool:
        return normalize_path(path) in self._sizes

    def __len__(self) -> int:
        return len(self._sizes)

    def get(self, path) -> Size | None:
        """Cached size for path, or None."""
        return self._sizes.get(normalize_path(path))

    def store(self, path, size: Size) -> Size:
        """Store size for path unless already cached; return the kept value."""
        return self._sizes.setdefault(normalize_path(path), size)

    def lookup_or_compute(
        self,
        path,
        filename_filter: FilenameFilter = None,
        precise: bool = False,
    ) -> Size:
        """
        Return the cached size for path, scanning it on a miss.

        Args:
            path: Path to measure
            filename_filter: Filter passed to the scanner on a miss
            precise: Keep fractional MB on a miss

        Returns:
            Size in MB
        """
        key = normalize_path(path)
        if key in self._sizes:
            return self._sizes[key]

        size = self._scanner(key, filename_filter, precise)
        logger.debug("Cached %s = %s MB", key, size)
        return self.store(key, size)

    def entries(self) -> list[SizeEntry]:
        """All cached sizes as SizeEntry models."""
        return [SizeEntry(path=p, size=s) for p, s in self._sizes.items()]

    def clear(self) -> None:
        """Drop every cached size."""
        self._sizes.clear()


def lookup_or_compute(
    view, path, filename_filter: FilenameFilter = None, precise: bool = False
) -> Size:
    """Look up path in view's cache, computing it on a miss."""
    return view.cache.lookup_or_compute(path, filename_filter, precise)
