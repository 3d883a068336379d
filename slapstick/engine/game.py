"""
Game - owns the entities, the clock and the run loop.

Per tick:
    render(surface)  paint entities in ascending z, then measure time_delta
    update()         every entity reads time_delta and pointer from the Game
    on_frame()       host hook: present the frame, pump input
    yield            await asyncio.sleep(0), no fixed tick rate

Rendering before update means each frame shows the state from the
previous tick's update, and the first update already has a time_delta.
"""

import asyncio
import time
from typing import Any, Callable, List, Optional, Type, TypeVar

from models import Point2D
from slapstick.engine.assets import AssetResolver
from slapstick.engine.entity import Entity
from slapstick.engine.surface import DrawingSurface
from slapstick.logging import get_logger

log = get_logger('game_engine')

E = TypeVar('E', bound=Entity)


def monotonic_ms() -> float:
    """Wall-clock milliseconds from a monotonic source."""
    return time.monotonic() * 1000.0


class Game:
    """Entity collection, frame timing, pointer state and run loop.

    Attributes:
        entities: Live entities in spawn order (update order)
        time_delta: Milliseconds between the last two render calls, or
            None before the first render
        pointer: Latest normalized pointer position, or None before input
        frame_count: Completed ticks of the run loop
    """

    def __init__(
        self,
        assets: Optional[AssetResolver] = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        """Initialize game state.

        Args:
            assets: Resolver holding the per-type images
            clock: Millisecond time source (injectable for tests)
        """
        self.assets = assets if assets is not None else AssetResolver()
        self._clock = clock
        self.entities: List[Entity] = []
        self.last_render_time: float = clock()
        self.time_delta: Optional[float] = None
        self.pointer: Optional[Point2D] = None
        self.frame_count = 0
        self.running = False

    @property
    def dt(self) -> float:
        """Frame delta in seconds (0 before the first render)."""
        if self.time_delta is None:
            return 0.0
        return self.time_delta / 1000.0

    # =========================================================================
    # Entities
    # =========================================================================

    def spawn(self, entity_type: Type[E], *args: Any, **kwargs: Any) -> E:
        """Construct an entity and add it to the live collection."""
        entity = entity_type(*args, **kwargs)
        self.entities.append(entity)
        log.debug("Spawned %r", entity)
        return entity

    def entity_types(self) -> List[Type[Entity]]:
        """Distinct entity types in use, in first-spawn order."""
        types: List[Type[Entity]] = []
        for entity in self.entities:
            if type(entity) not in types:
                types.append(type(entity))
        return types

    # =========================================================================
    # Frame
    # =========================================================================

    def render(self, surface: DrawingSurface) -> None:
        """Clear the surface, paint by ascending z, then measure the frame."""
        surface.clear()
        # sorted() is stable: equal z keeps spawn order
        for entity in sorted(self.entities, key=lambda e: e.z):
            if not entity.active:
                continue
            entity.render(surface, self.assets.get(entity.asset_key()))

        now = self._clock()
        self.time_delta = now - self.last_render_time
        self.last_render_time = now

    def update(self) -> None:
        """Run every entity's update hook in spawn order."""
        for entity in self.entities:
            entity.update(self)

    def receive_input(self, x: float, y: float) -> None:
        """Store the latest normalized pointer position."""
        self.pointer = Point2D(x=x, y=y)

    # =========================================================================
    # Run loop
    # =========================================================================

    async def prepare(self) -> None:
        """Resolve the image of every entity type in use.

        Raises:
            ConfigurationError: A type declares no usable sprite
            AssetResolutionError: A sprite could not be fetched or decoded
        """
        types = self.entity_types()
        log.info("Resolving sprites for %s", ', '.join(t.__name__ for t in types))
        await self.assets.resolve_all(types)

    def tick(self, surface: DrawingSurface) -> None:
        """One frame: render then update."""
        self.render(surface)
        self.update()

    async def run(
        self,
        surface: DrawingSurface,
        on_frame: Optional[Callable[[], None]] = None,
        max_frames: Optional[int] = None,
    ) -> None:
        """Tick until stop() is called or max_frames ticks have run.

        Yields to the event loop after every tick. Exceptions from
        render, update or on_frame end the loop and propagate.
        """
        self.running = True
        log.info("Run loop started")
        try:
            while self.running:
                self.tick(surface)
                if on_frame is not None:
                    on_frame()
                self.frame_count += 1
                if max_frames is not None and self.frame_count >= max_frames:
                    break
                await asyncio.sleep(0)
        finally:
            self.running = False
            log.info("Run loop stopped after %d frames", self.frame_count)

    async def start(
        self,
        surface: DrawingSurface,
        on_frame: Optional[Callable[[], None]] = None,
        max_frames: Optional[int] = None,
    ) -> None:
        """Resolve assets, then run the loop."""
        await self.prepare()
        await self.run(surface, on_frame=on_frame, max_frames=max_frames)

    def stop(self) -> None:
        """Ask the run loop to exit after the current tick."""
        self.running = False
