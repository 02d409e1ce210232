"""Dead-line classification of running totals."""

from typing import Union

from marksize.models import Classification, Size

DeadLine = Union[int, float, bool, None]


def deadline_enabled(dead_line: DeadLine) -> bool:
    """A dead-line of None or False disables classification."""
    return dead_line is not None and dead_line is not False


def classify(total: Size, dead_line: DeadLine) -> Classification:
    """Return OVER iff the dead-line is enabled and total exceeds it."""
    if deadline_enabled(dead_line) and total > dead_line:
        return Classification.OVER
    return Classification.NORMAL
