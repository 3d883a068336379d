"""HandSlap entity types and their sprites."""

from slapstick.engine import Entity, Hand


class Face(Entity):
    """The stationary target, painted behind the hand."""

    SPRITE = "face"

    def __init__(self, x: float, y: float):
        super().__init__(x, y, z=-1, w=0.6)


class SlapHand(Hand):
    """The player's hand."""

    SPRITE = "hand"
