"""
Pointer Event - a single pointer move or click.

Uses a frozen dataclass so events are immutable once queued.
"""
from dataclasses import dataclass
from enum import Enum

from models import Point2D


class PointerEventType(str, Enum):
    """Kinds of pointer events.

    Attributes:
        MOVE: The pointer moved
        CLICK: The primary button was pressed
    """
    MOVE = "move"
    CLICK = "click"


@dataclass(frozen=True)
class PointerEvent:
    """Immutable pointer event from any source.

    Attributes:
        position: Normalized position ([0, 1] relative to the surface)
        timestamp: Time when the event occurred (seconds, monotonic clock)
        event_type: MOVE or CLICK
    """
    position: Point2D
    timestamp: float
    event_type: PointerEventType = PointerEventType.MOVE

    def __post_init__(self):
        """Validate timestamp is non-negative."""
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    def __str__(self) -> str:
        return (f"PointerEvent(pos=({self.position.x:.3f}, {self.position.y:.3f}), "
                f"t={self.timestamp:.3f}, type={self.event_type.value})")
