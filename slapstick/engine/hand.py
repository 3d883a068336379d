"""Hand entity: spring pursuit of the pointer and a one-shot slap.

The hand accelerates toward the pointer in proportion to the distance,
loses a fixed fraction of its velocity each frame, and tilts with its
horizontal position and speed. Swinging left through the target zone fast
enough fires the collision callback once; the hand has to travel back past
RESET_X before it can fire again.
"""

import math
from typing import Callable, Optional, TYPE_CHECKING

from slapstick.engine.entity import Entity

if TYPE_CHECKING:
    from slapstick.engine.game import Game


class Hand(Entity):
    """Pointer-seeking entity with a debounced collision reaction."""

    SPRING_DIVISOR = 1.5
    # Applied per frame, not scaled by dt
    DAMPING = 0.92
    MAX_ROTATION = math.pi / 2

    # Target zone (exclusive bounds) and minimum leftward speed
    HIT_X = (0.5, 0.6)
    HIT_Y = (0.4, 0.6)
    HIT_MAX_VX = -2.0

    RESET_X = 0.9

    def __init__(
        self,
        x: float,
        y: float,
        on_collide: Optional[Callable[[], None]] = None,
        z: float = 0.0,
        w: float = 0.3,
        h: Optional[float] = None,
    ):
        """Initialize hand.

        Args:
            x, y: Normalized start position
            on_collide: Zero-argument reaction, called at most once per
                armed swing; exceptions it raises propagate to the caller
            z, w, h: See Entity
        """
        super().__init__(x, y, z=z, w=w, h=h)
        self.on_collide = on_collide
        self.can_collide = True

    def update(self, game: 'Game') -> None:
        dt = game.dt

        self.x += self.vx * dt
        self.y += self.vy * dt

        # No spring before the first pointer input (rather than pulling toward 0, 0)
        if game.pointer is not None:
            self.vx += (game.pointer.x - self.x) / self.SPRING_DIVISOR
            self.vy += (game.pointer.y - self.y) / self.SPRING_DIVISOR

        self.vx *= self.DAMPING
        self.vy *= self.DAMPING

        self.r = min(self.tilt(), self.MAX_ROTATION)

        if self.check_collision():
            if self.on_collide is not None:
                self.on_collide()
            self.can_collide = False

        if self.check_reset():
            self.can_collide = True

    def tilt(self) -> float:
        """Unclamped rotation from horizontal position and velocity."""
        return -2 * (1 - self.x) + self.vx / 5 + math.pi / 3

    def check_collision(self) -> bool:
        """True when armed, inside the target zone and swinging left fast."""
        return (
            self.can_collide
            and self.HIT_X[0] < self.x < self.HIT_X[1]
            and self.HIT_Y[0] < self.y < self.HIT_Y[1]
            and self.vx < self.HIT_MAX_VX
        )

    def check_reset(self) -> bool:
        """True once the hand is back in its rest zone."""
        return self.x > self.RESET_X
