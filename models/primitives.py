"""
Shared primitive data types.

Pointer positions, window sizes and colors used by the engine, the input
sources and game configuration.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from typing import Tuple


class Point2D(BaseModel):
    """Immutable 2D point.

    Used for normalized pointer positions ([0, 1] relative to the surface)
    as well as pixel coordinates.

    Examples:
        >>> pointer = Point2D(x=0.5, y=0.5)  # Center of the surface
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Point2D(x={self.x:.3f}, y={self.y:.3f})"


class Resolution(BaseModel):
    """Window or surface size in pixels.

    Examples:
        >>> hd = Resolution(width=1280, height=720)
        >>> hd.aspect_ratio
        1.7777777777777777
    """
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @computed_field
    @property
    def aspect_ratio(self) -> float:
        """Calculate aspect ratio (width / height)."""
        return self.width / self.height

    model_config = ConfigDict(frozen=True)

    def normalize(self, x: float, y: float) -> Point2D:
        """Convert pixel coordinates to [0, 1] coordinates on this size."""
        return Point2D(x=x / self.width, y=y / self.height)

    def __str__(self) -> str:
        return f"Resolution({self.width}x{self.height})"


class Color(BaseModel):
    """Immutable RGB color with validation."""
    r: int
    g: int
    b: int

    @field_validator('r', 'g', 'b')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        """Validate color components are in valid range [0, 255]."""
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @classmethod
    def parse(cls, value: str) -> 'Color':
        """Parse "r,g,b" (as used in .env files)."""
        parts = [p.strip() for p in value.split(',')]
        if len(parts) != 3:
            raise ValueError(f"Expected 'r,g,b', got {value!r}")
        return cls(r=int(parts[0]), g=int(parts[1]), b=int(parts[2]))

    @property
    def as_tuple(self) -> Tuple[int, int, int]:
        """Return color as RGB tuple for pygame."""
        return (self.r, self.g, self.b)

    model_config = ConfigDict(frozen=True)
