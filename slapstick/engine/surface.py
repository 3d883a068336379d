"""Drawing surfaces the Game renders onto."""

import math
from typing import Any, Protocol, Tuple, runtime_checkable

import pygame


@runtime_checkable
class DrawingSurface(Protocol):
    """What entity rendering needs from a target surface.

    Pixel size is read live on every frame, so a resized window is honored.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def clear(self) -> None: ...

    def draw_image(
        self,
        image: Any,
        center: Tuple[float, float],
        size: Tuple[float, float],
        rotation: float,
    ) -> None:
        """Draw image scaled to size, rotated by rotation radians about center."""
        ...


class PygameSurface:
    """DrawingSurface backed by a pygame.Surface (usually the display).

    Rotation follows the screen convention: positive radians turn clockwise
    because y points down.
    """

    def __init__(self, surface: pygame.Surface,
                 background: Tuple[int, int, int] = (0, 0, 0)):
        self.surface = surface
        self.background = background

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def set_surface(self, surface: pygame.Surface) -> None:
        """Point at a new surface (after the display was recreated)."""
        self.surface = surface

    def clear(self) -> None:
        self.surface.fill(self.background)

    def draw_image(
        self,
        image: pygame.Surface,
        center: Tuple[float, float],
        size: Tuple[float, float],
        rotation: float,
    ) -> None:
        w = max(1, round(abs(size[0])))
        h = max(1, round(abs(size[1])))
        scaled = pygame.transform.scale(image, (w, h))
        if rotation:
            # pygame rotates counter-clockwise for positive degrees
            scaled = pygame.transform.rotate(scaled, -math.degrees(rotation))
        rect = scaled.get_rect(center=(round(center[0]), round(center[1])))
        self.surface.blit(scaled, rect)
