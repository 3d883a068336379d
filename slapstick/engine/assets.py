"""Type-scoped asset resolution.

Each entity type declares the name of its sprite (Entity.SPRITE). The
AssetResolver fetches and decodes that sprite once per type and keeps the
decoded surface in a per-type registry that every instance reads from.

Sources can be:
- http(s) URLs, fetched with aiohttp
- File paths (relative paths resolve against the assets directory)
- Data URIs (data:image/png;base64,...)

All resolution happens before the first frame; see Game.prepare().
"""

import asyncio
import base64
import binascii
import io
from pathlib import Path
from typing import Dict, Iterable, Optional, Type, Union

import aiohttp
import pygame

from slapstick.engine.config import SoundConfig, SpriteConfig
from slapstick.engine.entity import Entity
from slapstick.errors import AssetNotResolvedError, AssetResolutionError, ConfigurationError
from slapstick.logging import get_logger

log = get_logger('assets')

DEFAULT_TIMEOUT = 10.0  # seconds, per download


class AssetResolver:
    """Resolves and holds the shared image for each entity type.

    Handles:
    - URLs, file paths and data URIs
    - Sprite sheet region extraction
    - Transparency color keys
    - Flip transformations
    - Sounds for reactions (resolve_sound)
    """

    def __init__(
        self,
        sprites: Optional[Dict[str, SpriteConfig]] = None,
        sounds: Optional[Dict[str, SoundConfig]] = None,
        assets_dir: Optional[Path] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._sprite_configs: Dict[str, SpriteConfig] = dict(sprites or {})
        self._sound_configs: Dict[str, SoundConfig] = dict(sounds or {})
        self._assets_dir = Path(assets_dir) if assets_dir else None
        self._timeout = timeout
        self._images: Dict[Type[Entity], pygame.Surface] = {}
        self._decoded: Dict[str, pygame.Surface] = {}  # sprite name -> surface
        self._loading: Dict[str, asyncio.Future] = {}

    # --- Per-type registry ---

    def get(self, entity_type: Type[Entity]) -> pygame.Surface:
        """Get the resolved image for an entity type."""
        try:
            return self._images[entity_type]
        except KeyError:
            raise AssetNotResolvedError(
                f"Sprite for {entity_type.__name__} has not been resolved"
            ) from None

    def is_resolved(self, entity_type: Type[Entity]) -> bool:
        return entity_type in self._images

    def register(self, entity_type: Type[Entity], image: pygame.Surface) -> None:
        """Store an already-decoded image for an entity type."""
        self._images[entity_type] = image

    def sprite_config_for(self, entity_type: Type[Entity]) -> SpriteConfig:
        """Look up the sprite source an entity type declares.

        Raises:
            ConfigurationError: No SPRITE declared, or not in the sprite table
        """
        name = entity_type.SPRITE
        if not name:
            raise ConfigurationError(
                f"Entity {entity_type.__name__} does not declare a SPRITE"
            )
        config = self._sprite_configs.get(name)
        if config is None or not config.is_defined():
            raise ConfigurationError(
                f"Entity {entity_type.__name__} uses sprite '{name}', "
                f"which has no url, file or data source"
            )
        return config

    async def resolve(self, entity_type: Type[Entity]) -> pygame.Surface:
        """Fetch and decode the sprite for an entity type, once.

        Raises:
            ConfigurationError: The type has no usable sprite source
            AssetResolutionError: Fetching or decoding failed
        """
        if entity_type in self._images:
            return self._images[entity_type]

        config = self.sprite_config_for(entity_type)
        type_name = entity_type.__name__
        sprite_name = entity_type.SPRITE

        image = self._decoded.get(sprite_name)
        if image is None:
            # Types sharing a sprite wait on the same load
            loading = self._loading.get(sprite_name)
            if loading is None:
                log.info("Caching sprite for %s", type_name)
                loading = asyncio.ensure_future(self._load_sprite(sprite_name, config))
                self._loading[sprite_name] = loading
            try:
                image = await loading
            finally:
                self._loading.pop(sprite_name, None)

        self._images[entity_type] = image
        log.info("Sprite for %s loaded (%dx%d)", type_name,
                 image.get_width(), image.get_height())
        return image

    async def _load_sprite(self, sprite_name: str, config: SpriteConfig) -> pygame.Surface:
        raw = await self._read_source(sprite_name, config)
        image = self._decode_image(sprite_name, config, raw)
        self._decoded[sprite_name] = image
        return image

    async def resolve_all(self, entity_types: Iterable[Type[Entity]]) -> None:
        """Resolve every distinct type concurrently.

        The first failure propagates; no partial retry.
        """
        pending = []
        for entity_type in entity_types:
            if entity_type not in pending:
                pending.append(entity_type)
        await asyncio.gather(*(self.resolve(t) for t in pending))

    # --- Sounds ---

    def has_sound(self, name: str) -> bool:
        return name in self._sound_configs

    async def resolve_sound(self, name: str) -> pygame.mixer.Sound:
        """Fetch and decode a sound by name.

        Requires pygame.mixer to be initialized.

        Raises:
            ConfigurationError: Unknown sound name or no source
            AssetResolutionError: Fetching or decoding failed
        """
        config = self._sound_configs.get(name)
        if config is None or not config.is_defined():
            raise ConfigurationError(f"Sound '{name}' has no url, file or data source")

        raw = await self._read_source(name, config)
        try:
            sound = pygame.mixer.Sound(io.BytesIO(raw))
        except pygame.error as e:
            raise AssetResolutionError(name, config.locator, f"cannot decode sound: {e}") from e
        sound.set_volume(config.volume)
        log.info("Sound '%s' loaded", name)
        return sound

    # --- Fetching ---

    async def _read_source(self, name: str, config: Union[SpriteConfig, SoundConfig]) -> bytes:
        """Get the raw bytes of an asset from whichever source it declares."""
        if config.data:
            return self._decode_data_uri(name, config.data)
        if config.url:
            return await self._download(name, config.url)
        return await self._read_file(name, config.file)

    def _decode_data_uri(self, name: str, data_uri: str) -> bytes:
        """Decode a data URI (data:[<mediatype>][;base64],<data>)."""
        if not data_uri.startswith('data:') or ',' not in data_uri:
            raise AssetResolutionError(name, 'data URI', "malformed data URI")
        _, encoded = data_uri.split(',', 1)
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AssetResolutionError(name, 'data URI', f"invalid base64: {e}") from e

    async def _read_file(self, name: str, file: str) -> bytes:
        path = Path(file)
        if not path.is_absolute() and self._assets_dir:
            path = self._assets_dir / file
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise AssetResolutionError(name, str(path), e.strerror or str(e)) from e

    async def _download(self, name: str, url: str) -> bytes:
        log.debug("Fetching %s", url)
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as response:
                    response.raise_for_status()
                    return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AssetResolutionError(name, url, str(e) or type(e).__name__) from e

    # --- Decoding ---

    def _decode_image(self, name: str, config: SpriteConfig, raw: bytes) -> pygame.Surface:
        """Decode image bytes and apply region, color key and flips."""
        namehint = Path(config.file or config.url.split('?', 1)[0]).name
        try:
            sheet = pygame.image.load(io.BytesIO(raw), namehint)
        except pygame.error as e:
            raise AssetResolutionError(name, config.locator, f"cannot decode image: {e}") from e

        # convert_alpha() needs a display mode
        if pygame.display.get_surface() is not None:
            sheet = sheet.convert_alpha()

        if config.x is not None and config.y is not None:
            w = config.width or (sheet.get_width() - config.x)
            h = config.height or (sheet.get_height() - config.y)
            try:
                sprite = sheet.subsurface(pygame.Rect(config.x, config.y, w, h)).copy()
            except ValueError as e:
                raise AssetResolutionError(name, config.locator, f"bad region: {e}") from e
        else:
            sprite = sheet

        if config.transparent:
            sprite.set_colorkey(config.transparent)

        if config.flip_x or config.flip_y:
            sprite = pygame.transform.flip(sprite, config.flip_x, config.flip_y)
            # Re-apply colorkey after flip (transform may lose it)
            if config.transparent:
                sprite.set_colorkey(config.transparent)

        return sprite
