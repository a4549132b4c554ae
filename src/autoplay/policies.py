# src/autoplay/policies.py
"""
Scripted players for the soak driver. Each takes the engine and a numpy
Generator and returns the direction to queue for the next tick.
"""
from __future__ import annotations

import numpy as np  # type: ignore

from gridsnake.config import UP, DOWN, LEFT, RIGHT
from gridsnake.engine import Direction, SimulationEngine, is_opposite

DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

# Share of moves the mixed player picks at random
EXPLORE = 0.2


def _candidates(engine: SimulationEngine) -> list[Direction]:
    return [d for d in DIRECTIONS if not is_opposite(d, engine.direction)]


def wander(engine: SimulationEngine, gen: np.random.Generator) -> Direction:
    """Any of the three legal turns, uniformly. Dies quickly; good for wall hits."""
    options = _candidates(engine)
    return options[int(gen.integers(len(options)))]


def seek(engine: SimulationEngine, gen: np.random.Generator) -> Direction:
    """Step toward the food along a safe cell, ties broken at random."""
    options = _candidates(engine)
    hx, hy = engine.snake[0]
    fx, fy = engine.food
    n = engine.grid_size
    body = set(engine.snake)

    heads = np.array([(hx + dx, hy + dy) for dx, dy in options])
    in_grid = np.all((heads >= 0) & (heads < n), axis=1)
    free = np.array([tuple(h) not in body for h in heads.tolist()])
    dist = np.abs(heads[:, 0] - fx) + np.abs(heads[:, 1] - fy)

    # unsafe cells sort last; if every option is unsafe, keep going and die
    cost = np.where(in_grid & free, dist, np.iinfo(np.int64).max)
    if cost.min() == np.iinfo(np.int64).max:
        return engine.direction
    best = np.flatnonzero(cost == cost.min())
    return options[int(gen.choice(best))]


def mixed(engine: SimulationEngine, gen: np.random.Generator) -> Direction:
    if gen.random() < EXPLORE:
        return wander(engine, gen)
    return seek(engine, gen)


POLICIES = {
    "wander": wander,
    "seek": seek,
    "mixed": mixed,
}
