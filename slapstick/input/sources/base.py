"""
Base Input Source - abstract interface for pointer backends.
"""
from abc import ABC, abstractmethod
from typing import List

from slapstick.input.input_event import PointerEvent


class InputSource(ABC):
    """Abstract base class for input sources."""

    @abstractmethod
    def poll_events(self) -> List[PointerEvent]:
        """Return the events collected since the last poll."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Collect new events from the backend.

        Args:
            dt: Delta time in seconds since last update.
        """
        pass

    def latest_position(self, events: List[PointerEvent]):
        """Position of the last event in a batch, or None for an empty batch."""
        return events[-1].position if events else None
