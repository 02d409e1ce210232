"""Directory size scanning for marksize."""

import logging
import os
import re
from pathlib import Path
from typing import Union

from marksize.models import Size

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024

FilenameFilter = Union[str, re.Pattern[str], None]


def expand_path(path: Union[str, Path]) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(str(path))))


def compile_filter(filename_filter: FilenameFilter) -> re.Pattern[str] | None:
    """
    Compile a filename filter.

    A plain string is treated as a regular expression searched anywhere in
    the file name, so an ordinary substring works too. ``None`` and the empty
    string match every file.

    Raises:
        re.error: If the string is not a valid regular expression
    """
    if filename_filter is None:
        return None
    if isinstance(filename_filter, str):
        if not filename_filter:
            return None
        return re.compile(filename_filter)
    return filename_filter


def bytes_to_mb(size_bytes: int, precise: bool = False) -> Size:
    """Convert bytes to MB, truncating unless precise."""
    if precise:
        return size_bytes / BYTES_PER_MB
    return size_bytes // BYTES_PER_MB


def _matches(name: str, pattern: re.Pattern[str] | None) -> bool:
    return pattern is None or pattern.search(name) is not None


def _file_size(path: Path, pattern: re.Pattern[str] | None) -> int:
    """Size of a single path treated as a leaf file."""
    if not _matches(path.name, pattern):
        return 0
    try:
        return path.stat().st_size
    except (PermissionError, OSError) as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return 0


def scan_bytes(path: Union[str, Path], filename_filter: FilenameFilter = None) -> int:
    """
    Total bytes of matching regular files under path.

    Walks with os.scandir and an explicit stack, so depth is unbounded.
    Symlinks are never followed. Entries whose metadata cannot be read are
    skipped, and a subtree that cannot be listed contributes nothing.

    Args:
        path: Directory (or file) to measure
        filename_filter: Regex/substring matched against file names

    Returns:
        Total size in bytes
    """
    pattern = compile_filter(filename_filter)
    root = expand_path(path)

    if not os.path.isdir(root) or not os.access(root, os.R_OK | os.X_OK):
        return _file_size(root, pattern)

    total_size = 0
    stack = [str(root)]

    while stack:
        p = stack.pop()
        try:
            with os.scandir(p) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            if _matches(entry.name, pattern):
                                total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except (PermissionError, OSError) as e:
                        logger.debug("Skipping %s: %s", entry.path, e)
                        continue
        except (PermissionError, OSError) as e:
            logger.debug("Cannot list %s: %s", p, e)

    return total_size


def scan(
    path: Union[str, Path],
    filename_filter: FilenameFilter = None,
    precise: bool = False,
) -> Size:
    """
    Size in MB of all matching files reachable under path.

    A path that is not an accessible directory is measured as a single file.

    Args:
        path: Directory (or file) to measure
        filename_filter: Regex/substring matched against file names
        precise: Keep the fractional part instead of truncating

    Returns:
        Size in MB (int, or float when precise)
    """
    size_bytes = scan_bytes(path, filename_filter)
    logger.debug("Scanned %s: %d bytes", path, size_bytes)
    return bytes_to_mb(size_bytes, precise)
