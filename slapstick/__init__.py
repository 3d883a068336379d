"""
Slapstick

A small real-time 2D entity simulation and renderer: entities with a per-frame
update hook, depth-ordered sprite rendering, type-scoped async asset
resolution, and a cooperative run loop.
"""

__version__ = "0.1.0"
