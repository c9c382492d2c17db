"""Data models for the pull-to-refresh recognizer.

Samples are plain positions and timestamps, independent of any particular
input-event system, so recognizers can be driven by synthetic sequences.
"""

from enum import Enum

from pydantic import BaseModel, Field

from ..config import CONTENT_OFFSET_FACTOR, CONTENT_OFFSET_MAX
from ..errors import RefreshFailed


class GesturePhase(str, Enum):
    """Lifecycle of one pull-to-refresh interaction."""

    IDLE = "idle"
    TRACKING = "tracking"
    COMMITTING = "committing"    # Same tick as release; refresh decided
    REFRESHING = "refreshing"    # Refresh operation in flight


class PointerSample(BaseModel):
    """A single touch or pointer position."""

    x: float = 0.0
    y: float
    timestamp: float = Field(default=0.0, description="Sample time in milliseconds")

    model_config = {"frozen": True}


class GestureSession(BaseModel):
    """State of one touch interaction, owned by a single controller."""

    origin_y: float = Field(description="Vertical position at touch start")
    raw_distance: float = Field(default=0.0, ge=0)
    damped_distance: float = Field(default=0.0, ge=0)
    phase: GesturePhase = GesturePhase.TRACKING
    started_at: float = Field(default=0.0, description="Timestamp of the start sample")


class GestureSnapshot(BaseModel):
    """Read-only view for rendering the refresh indicator."""

    phase: GesturePhase
    raw_distance: float = 0.0
    damped_distance: float = 0.0
    threshold: float

    @property
    def progress(self) -> float:
        """Fraction of the threshold reached, capped at 1."""
        return min(1.0, self.damped_distance / self.threshold)

    @property
    def content_offset(self) -> float:
        """How far the feed is translated while pulling."""
        if self.phase != GesturePhase.TRACKING:
            return 0.0
        return min(self.damped_distance * CONTENT_OFFSET_FACTOR, CONTENT_OFFSET_MAX)

    @property
    def is_pulling(self) -> bool:
        return self.phase == GesturePhase.TRACKING


class RefreshOutcome(BaseModel):
    """Result of a committed refresh, delivered to on_refresh_end."""

    success: bool
    failure: RefreshFailed | None = None
    damped_distance: float = Field(description="Damped distance at release")

    model_config = {"arbitrary_types_allowed": True}

    @property
    def error(self) -> BaseException | None:
        """The exception raised by the refresh operation, if any."""
        return self.failure.cause if self.failure is not None else None
