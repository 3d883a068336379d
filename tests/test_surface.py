"""Tests for drawing onto a pygame surface."""

import math

import pygame
import pytest

from slapstick.engine import DrawingSurface, PygameSurface

RED = (255, 0, 0)
WHITE = (255, 255, 255)


@pytest.fixture
def target():
    return PygameSurface(pygame.Surface((100, 100)), background=WHITE)


def solid(width, height, color=RED):
    image = pygame.Surface((width, height))
    image.fill(color)
    return image


def rgb(surface, pos):
    return tuple(surface.surface.get_at(pos))[:3]


class TestPygameSurface:

    def test_is_drawing_surface(self, target):
        assert isinstance(target, DrawingSurface)

    def test_size_is_live(self, target):
        assert (target.width, target.height) == (100, 100)

        target.set_surface(pygame.Surface((320, 200)))

        assert (target.width, target.height) == (320, 200)

    def test_clear_fills_background(self, target):
        target.surface.fill(RED)

        target.clear()

        assert rgb(target, (0, 0)) == WHITE
        assert rgb(target, (99, 99)) == WHITE

    def test_draw_scaled_and_centered(self, target):
        target.clear()

        target.draw_image(solid(4, 4), (50, 50), (20, 20), 0.0)

        assert rgb(target, (50, 50)) == RED
        assert rgb(target, (41, 41)) == RED
        assert rgb(target, (58, 58)) == RED
        assert rgb(target, (38, 50)) == WHITE
        assert rgb(target, (62, 50)) == WHITE

    def test_quarter_turn(self, target):
        target.clear()

        target.draw_image(solid(4, 2), (50, 50), (40, 10), math.pi / 2)

        # 40x10 turned a quarter becomes 10x40
        assert rgb(target, (50, 32)) == RED
        assert rgb(target, (50, 68)) == RED
        assert rgb(target, (32, 50)) == WHITE
        assert rgb(target, (68, 50)) == WHITE

    def test_tiny_size_still_draws(self, target):
        target.clear()

        target.draw_image(solid(4, 4), (10, 10), (0.2, 0.2), 0.0)

        assert rgb(target, (10, 10)) == RED
