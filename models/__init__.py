"""
Data models shared across the engine, input sources and games.

Usage:
    >>> from models import Point2D, Resolution
"""

from .primitives import (
    Point2D,
    Resolution,
    Color,
)

__all__ = [
    'Point2D',
    'Resolution',
    'Color',
]
