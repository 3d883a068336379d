"""Asset registry for discovering asset definitions from YAML files.

Scans an assets/ directory tree for YAML registration files and converts
them to SpriteConfig / SoundConfig tables the AssetResolver consumes.

Supported file shapes:
- Tables: a file with ``sprites:`` and/or ``sounds:`` maps of name -> source
- Single asset: assets/sprites/hand.yaml -> sprite named "hand"
- Single asset with explicit ``name:`` field

Usage:
    registry = AssetRegistry(game_dir / 'assets')
    registry.discover()

    # Merge with inline definitions (inline takes precedence)
    sprites = registry.merge_sprites(inline_sprites)
    sounds = registry.merge_sounds(inline_sounds)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from slapstick.engine.config import AssetsConfig, SoundConfig, SpriteConfig
from slapstick.logging import get_logger

log = get_logger('asset_registry')

_IMAGE_SUFFIXES = ('.png', '.jpg', '.jpeg', '.gif', '.bmp', '.webp')
_SOUND_SUFFIXES = ('.wav', '.mp3', '.ogg', '.flac')


class AssetRegistry:
    """Discovers and loads asset definitions from YAML registration files."""

    def __init__(self, assets_dir: Optional[Path] = None):
        """Initialize registry.

        Args:
            assets_dir: Directory to scan; also the base for relative file paths
        """
        self._assets_dir = Path(assets_dir) if assets_dir else Path('assets')
        self._registered = AssetsConfig()

    @property
    def assets_dir(self) -> Path:
        return self._assets_dir

    def discover(self) -> AssetsConfig:
        """Scan the assets directory tree for *.yaml / *.yml files.

        Files that fail to parse are logged and skipped.

        Returns:
            The discovered sprite and sound tables
        """
        if not self._assets_dir.exists():
            log.debug("Assets directory %s does not exist", self._assets_dir)
            return self._registered

        paths = sorted(self._assets_dir.rglob('*.yaml')) + sorted(self._assets_dir.rglob('*.yml'))
        for yaml_path in paths:
            self._process_registration_file(yaml_path)

        log.info("Discovered %d sprites, %d sounds in %s",
                 len(self._registered.sprites), len(self._registered.sounds),
                 self._assets_dir)
        return self._registered

    def _process_registration_file(self, yaml_path: Path) -> None:
        """Process a single registration YAML file."""
        try:
            data = yaml.safe_load(yaml_path.read_text())
        except (OSError, yaml.YAMLError) as e:
            log.warning("Failed to process %s: %s", yaml_path, e)
            return

        if not data or not isinstance(data, dict):
            return

        rel_path = yaml_path.relative_to(self._assets_dir).as_posix()

        if isinstance(data.get('sprites'), dict) or isinstance(data.get('sounds'), dict):
            for name, entry in (data.get('sprites') or {}).items():
                if isinstance(entry, dict):
                    self._registered.sprites[name] = self._parse_sprite(entry)
            for name, entry in (data.get('sounds') or {}).items():
                if isinstance(entry, dict):
                    self._registered.sounds[name] = self._parse_sound(entry)
            return

        name = data.get('name') or yaml_path.stem
        asset_type = self._detect_asset_type(data, rel_path)
        if asset_type == 'sprite':
            self._registered.sprites[name] = self._parse_sprite(data)
        elif asset_type == 'sound':
            self._registered.sounds[name] = self._parse_sound(data)
        else:
            log.debug("Skipping %s: not an asset definition", rel_path)

    def _detect_asset_type(self, data: Dict[str, Any], rel_path: str) -> Optional[str]:
        """Detect asset type from file path or content.

        Priority:
        1. Path-based detection (sprites/, sounds/)
        2. Content-based detection (region/flip keys -> sprite, volume -> sound)
        3. File extension of the locator
        """
        path_lower = rel_path.lower()
        if path_lower.startswith('sprites/') or '/sprites/' in path_lower:
            return 'sprite'
        if path_lower.startswith('sounds/') or '/sounds/' in path_lower:
            return 'sound'

        data_keys = set(data.keys())
        if data_keys & {'x', 'y', 'width', 'height', 'flip_x', 'flip_y', 'transparent'}:
            return 'sprite'
        if data_keys & {'volume'}:
            return 'sound'

        locator = str(data.get('file') or data.get('url') or '')
        suffix = Path(locator.split('?', 1)[0]).suffix.lower()
        if suffix in _IMAGE_SUFFIXES:
            return 'sprite'
        if suffix in _SOUND_SUFFIXES:
            return 'sound'

        return None

    def _parse_sprite(self, data: Dict[str, Any]) -> SpriteConfig:
        return SpriteConfig(
            url=data.get('url', ''),
            file=data.get('file', ''),
            data=data.get('data'),
            transparent=self._parse_transparent(data.get('transparent')),
            x=data.get('x'),
            y=data.get('y'),
            width=data.get('width'),
            height=data.get('height'),
            flip_x=data.get('flip_x', False),
            flip_y=data.get('flip_y', False),
        )

    def _parse_sound(self, data: Dict[str, Any]) -> SoundConfig:
        return SoundConfig(
            url=data.get('url', ''),
            file=data.get('file', ''),
            data=data.get('data'),
            volume=float(data.get('volume', 1.0)),
        )

    def _parse_transparent(self, value: Any) -> Optional[Tuple[int, int, int]]:
        """Parse transparent color value to RGB tuple."""
        if isinstance(value, (list, tuple)) and len(value) >= 3:
            return (int(value[0]), int(value[1]), int(value[2]))
        return None

    def get_sprites(self) -> Dict[str, SpriteConfig]:
        """Get all registered sprites."""
        return self._registered.sprites

    def get_sounds(self) -> Dict[str, SoundConfig]:
        """Get all registered sounds."""
        return self._registered.sounds

    def merge_sprites(self, inline_sprites: Dict[str, SpriteConfig]) -> Dict[str, SpriteConfig]:
        """Merge registered sprites with inline definitions (inline wins)."""
        merged = dict(self._registered.sprites)
        merged.update(inline_sprites)
        return merged

    def merge_sounds(self, inline_sounds: Dict[str, SoundConfig]) -> Dict[str, SoundConfig]:
        """Merge registered sounds with inline definitions (inline wins)."""
        merged = dict(self._registered.sounds)
        merged.update(inline_sounds)
        return merged
