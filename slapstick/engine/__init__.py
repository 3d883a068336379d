"""
Entity engine: entities, per-type asset resolution, drawing surfaces and the
Game orchestrator with its cooperative run loop.
"""

from slapstick.engine.assets import AssetResolver
from slapstick.engine.asset_registry import AssetRegistry
from slapstick.engine.config import AssetsConfig, SoundConfig, SpriteConfig
from slapstick.engine.entity import Entity
from slapstick.engine.game import Game
from slapstick.engine.hand import Hand
from slapstick.engine.surface import DrawingSurface, PygameSurface

__all__ = [
    'AssetResolver',
    'AssetRegistry',
    'AssetsConfig',
    'SoundConfig',
    'SpriteConfig',
    'Entity',
    'Game',
    'Hand',
    'DrawingSurface',
    'PygameSurface',
]
