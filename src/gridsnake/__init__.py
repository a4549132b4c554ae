"""Grid snake: simulation engine, tick scheduler and pygame shell."""

from gridsnake.engine import GameState, SimulationEngine, Snapshot
from gridsnake.scheduler import TickScheduler
from gridsnake.storage import HighScoreStore, MemoryHighScoreStore

__all__ = [
    "GameState",
    "SimulationEngine",
    "Snapshot",
    "TickScheduler",
    "HighScoreStore",
    "MemoryHighScoreStore",
]
