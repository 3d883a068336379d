"""
Entity - base class for drawable, simulated objects.

An entity carries:
- Transform (normalized position, depth, size scale, rotation)
- Physics (velocity)
- Visibility (active)
- An asset source declared per type (SPRITE)

The resolved image is shared by every instance of a type. It lives in the
AssetResolver, not on the entity, and is handed to render() by the Game.
"""

from typing import Any, ClassVar, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from slapstick.engine.game import Game
    from slapstick.engine.surface import DrawingSurface


class Entity:
    """A positioned object with a per-frame update hook and a sprite.

    Positions are normalized to the surface: (0, 0) is the top-left corner,
    (1, 1) the bottom-right. Lower z paints first.
    """

    # Name of the sprite in the resolver's sprite table; empty = no source
    SPRITE: ClassVar[str] = ""

    def __init__(
        self,
        x: float,
        y: float,
        z: float = 0.0,
        w: float = 0.1,
        h: Optional[float] = None,
    ):
        """Initialize entity.

        Args:
            x: Center X, normalized to surface width
            y: Center Y, normalized to surface height
            z: Depth for draw ordering (ascending)
            w: Width scale, relative to surface width
            h: Height scale, relative to surface height (None = keep the
               image aspect ratio)
        """
        self.x = x
        self.y = y
        self.z = z
        self.w = w
        self.h = h
        self.vx = 0.0
        self.vy = 0.0
        self.r = 0.0
        self.active = True

    @classmethod
    def type_name(cls) -> str:
        return cls.__name__

    @classmethod
    def asset_key(cls) -> type:
        """Key of the shared image in the asset registry: the entity type."""
        return cls

    def update(self, game: 'Game') -> None:
        """Per-frame logic. Static entities keep the default no-op."""
        pass

    def screen_size(self, surface: 'DrawingSurface', image: Any) -> Tuple[float, float]:
        """Compute the on-screen (width, height) in pixels.

        Args:
            surface: Target surface (for its current pixel size)
            image: Resolved image exposing get_width() / get_height()
        """
        tw = self.w * surface.width
        if self.h is not None:
            th = self.h * surface.height
        else:
            th = tw / (image.get_width() / image.get_height())
        return tw, th

    def render(self, surface: 'DrawingSurface', image: Any) -> None:
        """Draw the image centered on the entity, rotated by r.

        Does nothing while inactive. Never mutates entity state.
        """
        if not self.active:
            return

        tw, th = self.screen_size(surface, image)
        cx = self.x * surface.width
        cy = self.y * surface.height
        surface.draw_image(image, (cx, cy), (tw, th), self.r)

    def __repr__(self) -> str:
        return (f"{self.type_name()}(x={self.x:.3f}, y={self.y:.3f}, z={self.z}, "
                f"vx={self.vx:.3f}, vy={self.vy:.3f}, r={self.r:.3f}, active={self.active})")
