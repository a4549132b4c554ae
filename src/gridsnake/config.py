from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

# ----- Window & grid -----
GRID_SIZE = 20
CELL_SIZE = 20
HUD_HEIGHT = 32

def window_size(grid_size: int) -> Tuple[int, int]:
    return grid_size * CELL_SIZE, grid_size * CELL_SIZE + HUD_HEIGHT

# ----- Colors -----
BG        = (248, 249, 250)
GRID_LINE = (233, 236, 239)
HEAD      = (118, 75, 162)
BODY      = (85, 104, 211)
FOOD      = (255, 107, 107)
TEXT      = (52, 58, 64)
OVERLAY   = (0, 0, 0, 140)
OVERLAY_TEXT = (240, 240, 250)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Scoring -----
FOOD_REWARD = 10

# ----- Difficulty: level -> tick interval (ms) -----
DIFFICULTIES = {
    "easy": 150,
    "medium": 100,
    "hard": 60,
}
DEFAULT_DIFFICULTY = "medium"


def default_highscore_path() -> str:
    return str(Path.home() / ".gridsnake" / "highscore.json")


# ----- Tunables (overridable from the command line) -----
@dataclass
class Config:
    seed: Optional[int] = None
    grid_size: int = GRID_SIZE
    difficulty: str = DEFAULT_DIFFICULTY
    highscore_path: str = field(default_factory=default_highscore_path)
    fps: int = 60
    log_level: str = "INFO"

CFG = Config()
