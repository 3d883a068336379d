"""Tests for Game: spawning, frame timing, draw order and the run loop."""

import asyncio
import math

import pytest

from conftest import FakeImage, RecordingSurface, StepClock
from slapstick.engine import AssetResolver, Entity, Game, Hand
from slapstick.errors import AssetNotResolvedError


class Marker(Entity):
    """Static entity that records its update order."""

    SPRITE = "marker"

    def __init__(self, x, y, z=0.0, log=None, tag=None):
        super().__init__(x, y, z=z)
        self.log = log
        self.tag = tag

    def update(self, game):
        if self.log is not None:
            self.log.append(self.tag)


class Exploding(Entity):
    SPRITE = "marker"

    def update(self, game):
        raise ValueError("update failed")


@pytest.fixture
def resolver():
    r = AssetResolver()
    r.register(Marker, FakeImage(100, 100, "marker"))
    r.register(Exploding, FakeImage(100, 100, "marker"))
    r.register(Hand, FakeImage(200, 100, "hand"))
    return r


@pytest.fixture
def game(resolver, step_clock):
    return Game(resolver, clock=step_clock)


class TestSpawn:

    def test_spawn_constructs_and_adds(self, game):
        entity = game.spawn(Marker, 0.2, 0.3, z=4)

        assert isinstance(entity, Marker)
        assert game.entities == [entity]
        assert (entity.x, entity.y, entity.z) == (0.2, 0.3, 4)

    def test_entity_types_are_distinct_in_spawn_order(self, game):
        game.spawn(Hand, 0.5, 0.5)
        game.spawn(Marker, 0.1, 0.1)
        game.spawn(Hand, 0.6, 0.6)

        assert game.entity_types() == [Hand, Marker]


class TestTiming:

    def test_time_delta_none_before_first_render(self, game):
        assert game.time_delta is None
        assert game.dt == 0.0

    def test_time_delta_measured_between_renders(self, game, surface):
        game.render(surface)
        assert game.time_delta == 16

        game.render(surface)
        assert game.time_delta == 16
        assert game.dt == pytest.approx(0.016)

    def test_last_render_time_tracks_clock(self, resolver, surface):
        clock = StepClock(start=1000.0, step=20.0)
        game = Game(resolver, clock=clock)
        assert game.last_render_time == 1000.0

        game.render(surface)

        assert game.last_render_time == 1020.0
        assert game.time_delta == 20.0

    def test_time_delta_non_negative(self, resolver, surface):
        game = Game(resolver, clock=lambda: 5.0)

        game.render(surface)

        assert game.time_delta == 0.0


class TestInput:

    def test_pointer_none_until_input(self, game):
        assert game.pointer is None

    def test_latest_input_wins(self, game):
        game.receive_input(0.1, 0.2)
        game.receive_input(0.7, 0.8)

        assert (game.pointer.x, game.pointer.y) == (0.7, 0.8)


class TestRender:

    def test_clears_before_drawing(self, game, surface):
        game.spawn(Marker, 0.5, 0.5)

        game.render(surface)

        assert surface.calls[0] == ('clear',)
        assert len(surface.draws) == 1

    def test_empty_game_only_clears(self, game, surface):
        game.render(surface)

        assert surface.calls == [('clear',)]

    def test_draws_in_ascending_z(self, game, surface):
        game.spawn(Marker, 0.1, 0.5, z=2)
        game.spawn(Marker, 0.2, 0.5, z=-1)
        game.spawn(Marker, 0.3, 0.5, z=0)

        game.render(surface)

        xs = [round(center[0]) for _, _, center, _, _ in surface.draws]
        assert xs == [160, 240, 80]

    def test_equal_z_keeps_spawn_order(self, game, surface):
        for x in (0.4, 0.1, 0.3, 0.2):
            game.spawn(Marker, x, 0.5, z=1)

        game.render(surface)

        xs = [round(center[0]) for _, _, center, _, _ in surface.draws]
        assert xs == [320, 80, 240, 160]

    def test_render_does_not_reorder_entities(self, game, surface):
        high = game.spawn(Marker, 0.1, 0.5, z=5)
        low = game.spawn(Marker, 0.2, 0.5, z=0)

        game.render(surface)

        assert game.entities == [high, low]

    def test_inactive_entity_skipped(self, game, surface):
        game.spawn(Marker, 0.1, 0.5).active = False
        game.spawn(Marker, 0.2, 0.5)

        game.render(surface)

        assert len(surface.draws) == 1

    def test_shared_image_per_type(self, game, surface, resolver):
        game.spawn(Marker, 0.1, 0.5)
        game.spawn(Marker, 0.9, 0.5)

        game.render(surface)

        images = [image for _, image, _, _, _ in surface.draws]
        assert images[0] is images[1] is resolver.get(Marker)

    def test_inactive_unresolved_type_is_skipped(self, step_clock, surface):
        """Hidden entities never ask the resolver for their image."""
        game = Game(AssetResolver(), clock=step_clock)
        game.spawn(Marker, 0.5, 0.5).active = False

        game.render(surface)

        assert surface.calls == [('clear',)]
        assert game.time_delta == 16

    def test_unresolved_type_raises(self, step_clock, surface):
        game = Game(AssetResolver(), clock=step_clock)
        game.spawn(Marker, 0.5, 0.5)

        with pytest.raises(AssetNotResolvedError):
            game.render(surface)


class TestUpdate:

    def test_update_in_spawn_order(self, game):
        order = []
        game.spawn(Marker, 0.5, 0.5, z=3, log=order, tag='a')
        game.spawn(Marker, 0.5, 0.5, z=-3, log=order, tag='b')
        game.spawn(Marker, 0.5, 0.5, z=0, log=order, tag='c')

        game.update()

        assert order == ['a', 'b', 'c']

    def test_update_error_propagates(self, game):
        game.spawn(Exploding, 0.5, 0.5)

        with pytest.raises(ValueError, match="update failed"):
            game.update()


class TestRunLoop:

    def test_max_frames(self, game, surface):
        order = []
        game.spawn(Marker, 0.5, 0.5, log=order, tag='u')

        asyncio.run(game.run(surface, max_frames=3))

        assert game.frame_count == 3
        assert order == ['u', 'u', 'u']
        assert surface.calls.count(('clear',)) == 3
        assert game.running is False

    def test_render_precedes_update(self, game, surface):
        events = []
        game.spawn(Marker, 0.5, 0.5, log=events, tag='update')
        base_clear = surface.clear

        def clear():
            events.append('render')
            base_clear()

        surface.clear = clear

        asyncio.run(game.run(surface, max_frames=2))

        assert events == ['render', 'update', 'render', 'update']

    def test_first_update_sees_time_delta(self, resolver, surface):
        seen = []

        class Probe(Marker):
            def update(self, game):
                seen.append(game.time_delta)

        resolver.register(Probe, FakeImage(10, 10))
        game = Game(resolver, clock=StepClock(step=10))
        game.spawn(Probe, 0.5, 0.5)

        asyncio.run(game.run(surface, max_frames=2))

        assert seen == [10, 10]

    def test_stop_from_frame_hook(self, game, surface):
        def on_frame():
            if game.frame_count == 1:
                game.stop()

        asyncio.run(game.run(surface, on_frame=on_frame))

        assert game.frame_count == 2
        assert game.running is False

    def test_frame_hook_called_every_tick(self, game, surface):
        calls = []

        asyncio.run(game.run(surface, on_frame=lambda: calls.append(game.frame_count),
                             max_frames=4))

        assert calls == [0, 1, 2, 3]

    def test_error_ends_loop(self, game, surface):
        game.spawn(Exploding, 0.5, 0.5)

        with pytest.raises(ValueError):
            asyncio.run(game.run(surface, max_frames=10))

        assert game.frame_count == 0
        assert game.running is False

    def test_loop_yields_to_other_tasks(self, game, surface):
        ticks = []

        async def scenario():
            async def watcher():
                for _ in range(3):
                    ticks.append(game.frame_count)
                    await asyncio.sleep(0)
                game.stop()

            await asyncio.gather(game.run(surface), watcher())

        asyncio.run(scenario())

        assert len(ticks) == 3
        assert ticks != [ticks[0]] * 3

    def test_start_resolves_then_runs(self, step_clock, surface, monkeypatch):
        resolver = AssetResolver()
        resolved = []

        async def fake_resolve_all(types):
            resolved.extend(types)
            for t in types:
                resolver.register(t, FakeImage(10, 10))

        monkeypatch.setattr(resolver, 'resolve_all', fake_resolve_all)
        game = Game(resolver, clock=step_clock)
        game.spawn(Marker, 0.5, 0.5)

        asyncio.run(game.start(surface, max_frames=1))

        assert resolved == [Marker]
        assert game.frame_count == 1


# Hand at (0.5, 0.5) chasing a pointer at (0.55, 0.5) at 16 ms per frame;
# (x, vx) after each tick.
TRAJECTORY = [
    (0.5, 0.030666666666666693),
    (0.50049066666666664, 0.058579057777777846),
    (0.5014279315911111, 0.083683601779674183),
    (0.50276686921958591, 0.10595856718262091),
    (0.50446220629450789, 0.12541172861404645),
    (0.50646879395233269, 0.14207793003415872),
    (0.50874204083287922, 0.15601657725392681),
    (0.51123830606894205, 0.16730909001799493),
    (0.51391525150923001, 0.17605634189089428),
    (0.51673215297948427, 0.18237611404553908),
    (0.51965017080421294, 0.18640058682864538),
    (0.52263258019347125, 0.18827389069702474),
]


class TestHandTrajectory:
    """Fixed-step run of a Hand against known values."""

    def test_twelve_frames(self, game, surface):
        hand = game.spawn(Hand, 0.5, 0.5)
        game.receive_input(0.55, 0.5)

        for expected_x, expected_vx in TRAJECTORY:
            game.tick(surface)
            assert hand.x == pytest.approx(expected_x, rel=1e-12)
            assert hand.vx == pytest.approx(expected_vx, rel=1e-12)
            assert hand.y == 0.5
            assert hand.vy == 0.0
            assert hand.can_collide is True

    def test_first_frame_rotation(self, game, surface):
        hand = game.spawn(Hand, 0.5, 0.5)
        game.receive_input(0.55, 0.5)

        game.tick(surface)

        assert hand.r == pytest.approx(0.053330884529930955, rel=1e-12)
        assert hand.r == pytest.approx(-1.0 + hand.vx / 5 + math.pi / 3)

    def test_drawn_from_previous_update(self, game):
        """Each frame draws the state the previous tick left behind."""
        surface = RecordingSurface(1000, 1000)
        game.spawn(Hand, 0.5, 0.5)
        game.receive_input(0.55, 0.5)

        for _ in range(3):
            game.tick(surface)

        centers = [center for _, _, center, _, _ in surface.draws]
        assert centers[0] == pytest.approx((500.0, 500.0))
        assert centers[2][0] == pytest.approx(1000 * TRAJECTORY[1][0])
