"""Data models for marksize."""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field

Size = Union[int, float]


class Classification(str, Enum):
    """Threshold classification for a running total."""

    NORMAL = "normal"  # At or below the dead-line, or no dead-line set
    OVER = "over"  # Strictly above the dead-line


class LabelStyle(str, Enum):
    """Style for inline per-entry labels."""

    MARKED = "marked"


class ClearScope(str, Enum):
    """How far a clear-selection event reaches."""

    LOCAL = "local"  # Only the view that fired the event
    GLOBAL = "global"  # Every registered view


class ControllerState(str, Enum):
    """Global on/off state of the feature."""

    DISABLED = "disabled"
    ENABLED = "enabled"


class SizeEntry(BaseModel):
    """Size of one path, in megabytes (MiB)."""

    path: str = Field(..., description="Absolute path that was scanned")
    size: Size = Field(..., description="Size in MB, whole unless computed precisely")

    @property
    def is_fractional(self) -> bool:
        """Whether the size kept its fractional part."""
        return isinstance(self.size, float)


class StatusUpdate(BaseModel):
    """What a view's status indicator should show."""

    view_id: str = Field(..., description="View the status belongs to")
    total: Size = Field(0, description="Sum of the view's selected sizes")
    text: str = Field("", description="Rendered status text")
    style: Classification = Field(Classification.NORMAL, description="Visual classification")

    @property
    def is_over(self) -> bool:
        """Whether the total is flagged over the dead-line."""
        return self.style == Classification.OVER
