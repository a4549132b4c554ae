# scheduler.py
from __future__ import annotations

from typing import Dict, Mapping, Optional
import logging

from .config import DIFFICULTIES, DEFAULT_DIFFICULTY
from .engine import GameState, SimulationEngine

logger = logging.getLogger(__name__)


class TickScheduler:
    """
    Turns host frame callbacks (any rate, increasing ms timestamps) into
    engine ticks at a fixed interval.

    At most one advance() per callback: time beyond one interval is dropped,
    not caught up.
    """

    def __init__(
        self,
        engine: SimulationEngine,
        difficulty: str = DEFAULT_DIFFICULTY,
        difficulties: Mapping[str, int] = DIFFICULTIES,
    ) -> None:
        for level, ms in difficulties.items():
            if ms <= 0:
                raise ValueError(f"interval for {level!r} must be > 0, got {ms}")
        self._engine = engine
        self._difficulties: Dict[str, int] = dict(difficulties)
        self._difficulty = self._check_level(difficulty)
        self.last_tick_time: Optional[float] = None
        engine.add_listener(self._on_transition)

    @property
    def difficulty(self) -> str:
        return self._difficulty

    @property
    def interval_ms(self) -> int:
        return self._difficulties[self._difficulty]

    def set_difficulty(self, level: str) -> bool:
        """Switch level. Refused (returns False) while a game is running."""
        level = self._check_level(level)
        if self._engine.state is GameState.PLAYING:
            logger.debug("Ignoring difficulty change to %r while playing", level)
            return False
        self._difficulty = level
        logger.info("Difficulty set to %s (%d ms/tick)", level, self.interval_ms)
        return True

    def on_frame(self, current_time: float) -> bool:
        """Host callback. Returns True if this call advanced the engine."""
        if self._engine.state is not GameState.PLAYING:
            return False

        # First frame after start/resume only sets the baseline
        if self.last_tick_time is None:
            self.last_tick_time = current_time
            return False

        if current_time - self.last_tick_time < self.interval_ms:
            return False

        self._engine.advance()
        self.last_tick_time = current_time
        return True

    def _on_transition(self, old: GameState, new: GameState) -> None:
        if new is GameState.PLAYING:
            self.last_tick_time = None

    def _check_level(self, level: str) -> str:
        if level not in self._difficulties:
            known = ", ".join(sorted(self._difficulties))
            raise ValueError(f"Unknown difficulty {level!r} (expected one of: {known})")
        return level
