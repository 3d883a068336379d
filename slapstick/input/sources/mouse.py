"""
Mouse Input Source - pygame mouse motion and clicks.
"""
import time
from typing import Callable, List, Tuple

import pygame

from models import Point2D, Resolution
from slapstick.input.input_event import PointerEvent, PointerEventType
from slapstick.input.sources.base import InputSource


class MouseInputSource(InputSource):
    """Converts pygame mouse events into normalized PointerEvents.

    Positions are divided by the live surface size, so the source follows
    window resizes. Non-mouse events are re-posted to the pygame event queue
    for the host loop.
    """

    def __init__(self, surface_size: Callable[[], Tuple[int, int]]):
        """Initialize the mouse input source.

        Args:
            surface_size: Returns the current (width, height) in pixels
        """
        self._surface_size = surface_size
        self._event_queue: List[PointerEvent] = []

    def poll_events(self) -> List[PointerEvent]:
        """Get new input events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect motion and left clicks."""
        deferred = []
        for event in pygame.event.get():
            if event.type == pygame.MOUSEMOTION:
                self._queue(event.pos, PointerEventType.MOVE)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._queue(event.pos, PointerEventType.CLICK)
            elif event.type not in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                deferred.append(event)
        # Re-post once the queue is drained
        for event in deferred:
            pygame.event.post(event)

    def normalize(self, pos: Tuple[float, float]) -> Point2D:
        """Convert a pixel position to [0, 1] surface coordinates."""
        width, height = self._surface_size()
        return Resolution(width=width, height=height).normalize(pos[0], pos[1])

    def _queue(self, pos: Tuple[float, float], event_type: PointerEventType) -> None:
        self._event_queue.append(PointerEvent(
            position=self.normalize(pos),
            timestamp=time.monotonic(),
            event_type=event_type,
        ))

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
