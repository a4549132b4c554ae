# src/autoplay/soak.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional
import logging
import random

import numpy as np  # type: ignore

from gridsnake.config import FOOD_REWARD, GRID_SIZE
from gridsnake.engine import Direction, GameState, SimulationEngine, Snapshot, is_opposite
from gridsnake.storage import MemoryHighScoreStore

logger = logging.getLogger(__name__)

Policy = Callable[[SimulationEngine, np.random.Generator], Direction]


class InvariantViolation(Exception):
    """Raised when a tick leaves the engine in a state the rules forbid."""


# -----------------------------------------------------------------------------
# Per-tick checks
# -----------------------------------------------------------------------------
def check_board(snap: Snapshot) -> List[str]:
    problems = []
    n = snap.grid_size
    if any(not (0 <= x < n and 0 <= y < n) for x, y in snap.snake):
        problems.append(f"segment off the grid: {snap.snake}")
    if len(set(snap.snake)) != len(snap.snake):
        problems.append(f"duplicate segments: {snap.snake}")
    if snap.food in snap.snake:
        problems.append(f"food {snap.food} under the snake")
    if snap.score != FOOD_REWARD * (len(snap.snake) - 3):
        problems.append(f"score {snap.score} does not match length {len(snap.snake)}")
    return problems


def check_tick(before: Snapshot, after: Snapshot) -> List[str]:
    """Compare the engine before and after one advance() and list broken rules."""
    problems = check_board(after)

    if is_opposite(after.direction, before.direction):
        problems.append(f"reversed from {before.direction} to {after.direction}")
    if after.high_score < before.high_score:
        problems.append(f"high score dropped {before.high_score} -> {after.high_score}")

    if after.state is GameState.GAME_OVER:
        if after.snake != before.snake:
            problems.append("snake moved on the fatal tick")
        expected = max(before.high_score, after.score)
        if after.high_score != expected:
            problems.append(f"high score {after.high_score}, expected {expected}")
        return problems

    hx, hy = before.head
    dx, dy = after.direction
    if after.head != (hx + dx, hy + dy):
        problems.append(f"head jumped {before.head} -> {after.head}")

    grew = len(after.snake) - len(before.snake)
    ate = after.head == before.food
    if grew != (1 if ate else 0):
        problems.append(f"length changed by {grew} (ate={ate})")
    if after.score - before.score != (FOOD_REWARD if ate else 0):
        problems.append(f"score changed {before.score} -> {after.score} (ate={ate})")
    return problems


# -----------------------------------------------------------------------------
# Driver
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class EpisodeResult:
    ticks: int
    score: int
    length: int
    outcome: str    # "died" or "cutoff"


class SoakDriver:
    """
    Plays games on a real SimulationEngine as fast as possible and checks
    every tick against the movement, growth, food and scoring rules.
    """

    def __init__(self, grid_size: int = GRID_SIZE, seed: int = 0) -> None:
        self.store = MemoryHighScoreStore()
        self.engine = SimulationEngine(grid_size, store=self.store, rng=random.Random(seed))
        self.gen = np.random.default_rng(seed)

    def tick(self, direction: Optional[Direction]) -> bool:
        """Queue a direction, advance once and verify. Returns False once the game is over."""
        engine = self.engine
        if direction is not None:
            engine.set_desired_direction(direction)
        before = engine.snapshot()
        alive = engine.advance()
        problems = check_tick(before, engine.snapshot())
        if problems:
            raise InvariantViolation("; ".join(problems))
        return alive

    def run_episode(self, policy: Policy, max_ticks: int = 10_000) -> EpisodeResult:
        engine = self.engine
        # a cut-off game is still running; start over rather than resume it
        if engine.state is not GameState.GAME_OVER:
            engine.reset()
        engine.start()
        problems = check_board(engine.snapshot())
        if problems:
            raise InvariantViolation("; ".join(problems))

        ticks = 0
        while ticks < max_ticks:
            ticks += 1
            if not self.tick(policy(engine, self.gen)):
                return EpisodeResult(ticks, engine.score, len(engine.snake), "died")

        logger.debug("Episode cut off after %d ticks", ticks)
        return EpisodeResult(ticks, engine.score, len(engine.snake), "cutoff")
