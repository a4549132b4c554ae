import os
import random

# pygame must not try to open a real display or audio device
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from gridsnake.config import RIGHT
from gridsnake.engine import SimulationEngine
from gridsnake.storage import MemoryHighScoreStore


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def engine(store):
    """20x20 engine with seeded food placement and an in-memory high score."""
    return SimulationEngine(20, store=store, rng=random.Random(1234))


def arrange(engine, snake, food, direction=RIGHT):
    """Put the board in a known position without going through the rng."""
    engine._snake = list(snake)
    engine._food = food
    engine._direction = direction
    engine._pending = direction
