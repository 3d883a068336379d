"""Shared fixtures: headless pygame, a recording surface and a step clock."""
import os

# Headless pygame for every test module
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

from typing import Any, List, Tuple

import pygame
import pytest


class FakeImage:
    """Stand-in for a decoded sprite; only its size matters to entities."""

    def __init__(self, width: int, height: int, name: str = "image"):
        self._width = width
        self._height = height
        self.name = name

    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height


class RecordingSurface:
    """DrawingSurface that records calls instead of drawing."""

    def __init__(self, width: int = 800, height: int = 600):
        self.width = width
        self.height = height
        self.calls: List[Tuple[Any, ...]] = []

    def clear(self) -> None:
        self.calls.append(('clear',))

    def draw_image(self, image, center, size, rotation) -> None:
        self.calls.append(('draw', image, center, size, rotation))

    @property
    def draws(self) -> List[Tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == 'draw']


class StepClock:
    """Millisecond clock advancing a fixed step on every read."""

    def __init__(self, start: float = 0.0, step: float = 16.0):
        self.now = start
        self.step = step
        self.reads = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.reads += 1
        return value


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def step_clock():
    return StepClock()


@pytest.fixture
def pygame_init():
    """Initialize pygame (dummy drivers) for a test."""
    pygame.init()
    yield
    pygame.quit()
