# engine.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Tuple
import logging
import random

from .config import GRID_SIZE, RIGHT, FOOD_REWARD

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Direction = Tuple[int, int]


class GameState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class HighScoreBackend(Protocol):
    def load(self) -> int: ...
    def save(self, value: int) -> None: ...


# ---------- State machine ----------
# (state, event) -> next state. Events missing here leave the state alone.
TRANSITIONS: Dict[Tuple[GameState, str], GameState] = {
    (GameState.IDLE, "start"): GameState.PLAYING,
    (GameState.GAME_OVER, "start"): GameState.PLAYING,
    (GameState.PAUSED, "start"): GameState.PLAYING,
    (GameState.PLAYING, "pause"): GameState.PAUSED,
    (GameState.PAUSED, "pause"): GameState.PLAYING,
    (GameState.PLAYING, "collide"): GameState.GAME_OVER,
    (GameState.IDLE, "reset"): GameState.IDLE,
    (GameState.PLAYING, "reset"): GameState.IDLE,
    (GameState.PAUSED, "reset"): GameState.IDLE,
    (GameState.GAME_OVER, "reset"): GameState.IDLE,
}


def next_state(state: GameState, event: str) -> Optional[GameState]:
    """Return the state `event` leads to from `state`, or None if it is not allowed."""
    return TRANSITIONS.get((state, event))


# ---------- Helpers ----------
def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine handed to renderers."""
    grid_size: int
    snake: Tuple[Position, ...]   # head at index 0
    food: Position
    score: int
    high_score: int
    direction: Direction
    state: GameState

    @property
    def head(self) -> Position:
        return self.snake[0]


class SimulationEngine:
    """
    Grid, snake, food, score and the game-state machine.

    The engine knows nothing about time or drawing: a scheduler calls
    advance() once per tick and renderers read snapshot().
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        store: Optional[HighScoreBackend] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if grid_size < 4:
            raise ValueError(f"grid_size must be at least 4, got {grid_size}")
        self._grid_size = grid_size
        self._store = store
        self._rng = rng if rng is not None else random.Random()
        self._listeners: List[Callable[[GameState, GameState], None]] = []

        self._high_score = store.load() if store is not None else 0
        self._state = GameState.IDLE
        self._snake: List[Position] = []
        self._direction: Direction = RIGHT
        self._pending: Direction = RIGHT
        self._food: Position = (0, 0)
        self._score = 0
        self.reset()

    # ---------- Read accessors ----------
    @property
    def grid_size(self) -> int:
        return self._grid_size

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def snake(self) -> Tuple[Position, ...]:
        return tuple(self._snake)

    @property
    def food(self) -> Position:
        return self._food

    @property
    def score(self) -> int:
        return self._score

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def pending_direction(self) -> Direction:
        return self._pending

    def snapshot(self) -> Snapshot:
        return Snapshot(
            grid_size=self._grid_size,
            snake=tuple(self._snake),
            food=self._food,
            score=self._score,
            high_score=self._high_score,
            direction=self._direction,
            state=self._state,
        )

    def add_listener(self, fn: Callable[[GameState, GameState], None]) -> None:
        """Call fn(old, new) after every game-state change."""
        self._listeners.append(fn)

    # ---------- Operations ----------
    def reset(self) -> None:
        c = self._grid_size // 2
        self._snake = [(c, c), (c - 1, c), (c - 2, c)]
        self._direction = RIGHT
        self._pending = RIGHT
        self._score = 0
        self._food = self._spawn_food()
        self._fire("reset")

    def start(self) -> None:
        resuming = self._state is GameState.PAUSED
        if self._state in (GameState.IDLE, GameState.GAME_OVER):
            self.reset()
        if self._fire("start") and not resuming:
            logger.info("Game started (grid=%d)", self._grid_size)

    def toggle_pause(self) -> None:
        self._fire("pause")

    def set_desired_direction(self, d: Direction) -> bool:
        """Queue d for the next tick. Returns False if the input was dropped."""
        if self._state is not GameState.PLAYING:
            logger.debug("Ignoring direction %s while %s", d, self._state.value)
            return False
        # Compared against the committed direction, not the pending one.
        if is_opposite(d, self._direction):
            logger.debug("Ignoring reversal %s (moving %s)", d, self._direction)
            return False
        self._pending = d
        return True

    def advance(self) -> bool:
        """
        Run one tick. Returns True if the snake is still alive afterwards,
        False if the tick ended the game or the engine is not playing.
        """
        if self._state is not GameState.PLAYING:
            return False

        # Commit direction once per tick
        self._direction = self._pending

        hx, hy = self._snake[0]
        dx, dy = self._direction
        new_head = (hx + dx, hy + dy)

        # Wall collision
        if not self._in_bounds(new_head):
            self._game_over("wall")
            return False

        # Self collision (the tail still counts: it has not moved yet)
        if new_head in self._snake:
            self._game_over("self")
            return False

        # Move / grow
        self._snake.insert(0, new_head)
        if new_head == self._food:
            self._score += FOOD_REWARD
            self._food = self._spawn_food()
        else:
            self._snake.pop()

        logger.debug("Tick: head=%s len=%d score=%d", new_head, len(self._snake), self._score)
        return True

    # ---------- Internals ----------
    def _in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self._grid_size and 0 <= y < self._grid_size

    def _spawn_food(self) -> Position:
        # Rejection sampling; never returns if the snake fills the grid.
        occupied = set(self._snake)
        while True:
            fx = self._rng.randrange(self._grid_size)
            fy = self._rng.randrange(self._grid_size)
            if (fx, fy) not in occupied:
                return (fx, fy)

    def _game_over(self, reason: str) -> None:
        logger.info("Game over (%s): score=%d high=%d", reason, self._score, self._high_score)
        if self._score > self._high_score:
            self._high_score = self._score
            logger.info("New high score: %d", self._high_score)
            if self._store is not None:
                self._store.save(self._high_score)
        self._fire("collide")

    def _fire(self, event: str) -> bool:
        old = self._state
        new = next_state(old, event)
        if new is None:
            return False
        self._state = new
        if new is not old:
            for fn in self._listeners:
                fn(old, new)
        return True
