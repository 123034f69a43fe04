"""
Pytest fixtures for Underwell Pit tests.
"""
import random

import pytest

from underwell.gameplay.game import Game
from underwell.gameplay.world import World


class FixedRandom(random.Random):
    """random() always returns the same value, so jitter never fires at 0.5."""

    def __init__(self, value: float = 0.5):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def world() -> World:
    """An empty 960x640 pit with no walls, resonators or stones."""
    return World(width=960, height=640, rng=FixedRandom())


@pytest.fixture
def game() -> Game:
    """A freshly laid out level with seeded randomness."""
    return Game(960, 640, rng=random.Random(1234))
