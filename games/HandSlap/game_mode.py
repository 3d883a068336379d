"""HandSlap game mode.

Startup sequence:
    1. Spawn the face and the hand
    2. Resolve every sprite (fatal on failure) and the slap sound (optional)
    3. Show the start prompt until the player clicks
    4. Run the Game loop, feeding pointer motion in between frames
"""

import asyncio
import time
from pathlib import Path
from typing import Optional

import pygame

from games.HandSlap import config
from games.HandSlap.entities import Face, SlapHand
from slapstick.engine import AssetRegistry, AssetResolver, Game, PygameSurface
from slapstick.errors import AssetResolutionError, ConfigurationError
from slapstick.input.input_event import PointerEventType
from slapstick.input.sources import MouseInputSource
from slapstick.logging import close_all_sinks, create_sink_for_module, emit_record, get_logger, register_sink

log = get_logger('hand_slap')


class HandSlapMode:
    """Wires the Game to a pygame window, pointer input and sound."""

    def __init__(
        self,
        screen: pygame.Surface,
        audio_enabled: bool = config.AUDIO_ENABLED,
        assets_dir: Optional[Path] = None,
        resolver: Optional[AssetResolver] = None,
        fps_cap: int = config.FPS_CAP,
    ):
        """Initialize the game mode.

        Args:
            screen: Display surface to draw on
            audio_enabled: Load and play the slap sound
            assets_dir: Directory holding the asset manifest
            resolver: Pre-built resolver (skips manifest discovery)
            fps_cap: Frames per second limit, 0 = host speed
        """
        self.surface = PygameSurface(screen, background=config.BACKGROUND_COLOR.as_tuple)

        if resolver is None:
            assets_dir = assets_dir or config.ASSETS_DIR
            registry = AssetRegistry(assets_dir)
            registry.discover()
            resolver = AssetResolver(
                sprites=registry.get_sprites(),
                sounds=registry.get_sounds(),
                assets_dir=assets_dir,
                timeout=config.ASSET_TIMEOUT,
            )
        self.resolver = resolver

        self.game = Game(self.resolver)
        self.input = MouseInputSource(lambda: (self.surface.width, self.surface.height))
        self.audio_enabled = audio_enabled
        self.slap_sound: Optional[pygame.mixer.Sound] = None
        self.slaps = 0
        self.quit_requested = False
        self._fps_cap = fps_cap
        self._clock = pygame.time.Clock()

        register_sink('slaps', create_sink_for_module('slaps'))

        self.face = self.game.spawn(Face, 0.5, 0.5)
        self.hand = self.game.spawn(SlapHand, 0.5, 0.5, self.on_slap)

    # =========================================================================
    # Reaction
    # =========================================================================

    def on_slap(self) -> None:
        """Collision reaction: count, record, play the sound."""
        self.slaps += 1
        log.info("Slap #%d (vx=%.2f)", self.slaps, self.hand.vx)
        emit_record('slaps', {
            'type': 'slap',
            'count': self.slaps,
            'frame': self.game.frame_count,
            'x': self.hand.x,
            'y': self.hand.y,
            'vx': self.hand.vx,
        })
        if self.slap_sound is not None:
            self.slap_sound.play()

    # =========================================================================
    # Startup
    # =========================================================================

    async def load(self) -> None:
        """Resolve sprites, then the sound.

        Raises:
            ConfigurationError, AssetResolutionError: A sprite is unusable
        """
        await self.game.prepare()
        if self.audio_enabled:
            await self._load_sound()

    async def _load_sound(self) -> None:
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init()
            sound = await self.resolver.resolve_sound(config.SLAP_SOUND)
            sound.set_volume(sound.get_volume() * config.SOUND_VOLUME)
            self.slap_sound = sound
        except (pygame.error, ConfigurationError, AssetResolutionError) as e:
            log.warning("Slap sound unavailable, running silent: %s", e)
            self.slap_sound = None

    async def wait_for_start(self) -> bool:
        """Show the start prompt until a click.

        Returns:
            True to start, False if the window was closed
        """
        font = pygame.font.Font(None, 64)
        while True:
            if self._pump_input():
                log.info("Start clicked")
                return True
            if self.quit_requested:
                return False

            self.surface.clear()
            text = font.render(config.START_PROMPT, True, config.PROMPT_COLOR.as_tuple)
            rect = text.get_rect(center=(self.surface.width // 2, self.surface.height // 2))
            self.surface.surface.blit(text, rect)
            pygame.display.flip()

            await asyncio.sleep(0)
            self._clock.tick(30)

    # =========================================================================
    # Frame hook
    # =========================================================================

    def _pump_input(self) -> bool:
        """Drain pygame events into the Game.

        Returns:
            True if the primary button was clicked
        """
        self.input.update(self.game.dt)
        events = self.input.poll_events()
        latest = self.input.latest_position(events)
        if latest is not None:
            self.game.receive_input(latest.x, latest.y)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit_requested = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.quit_requested = True
            elif event.type == pygame.VIDEORESIZE:
                self.surface.set_surface(pygame.display.get_surface())
                log.debug("Resized to %dx%d", self.surface.width, self.surface.height)

        return any(e.event_type == PointerEventType.CLICK for e in events)

    def _on_frame(self) -> None:
        pygame.display.flip()
        self._pump_input()
        if self.quit_requested:
            self.game.stop()
        if self._fps_cap > 0:
            self._clock.tick(self._fps_cap)

    # =========================================================================
    # Entry
    # =========================================================================

    async def run(self, max_frames: Optional[int] = None) -> None:
        """Load, wait for the start click, then run until quit."""
        started = time.monotonic()
        try:
            await self.load()
            log.info("Assets ready in %.2fs", time.monotonic() - started)
            if not await self.wait_for_start():
                return
            await self.game.run(self.surface, on_frame=self._on_frame, max_frames=max_frames)
            log.info("Session over: %d slaps in %d frames", self.slaps, self.game.frame_count)
        finally:
            close_all_sinks()
