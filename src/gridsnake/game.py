# game.py
from typing import Optional, Tuple
import math

import pygame # type: ignore

from .config import (
    CELL_SIZE, HUD_HEIGHT,
    BG, GRID_LINE, HEAD, BODY, FOOD, TEXT, OVERLAY, OVERLAY_TEXT,
    UP, DOWN, LEFT, RIGHT,
)
from .engine import GameState, SimulationEngine, Snapshot
from .scheduler import TickScheduler

KEYMAP = {
    pygame.K_UP: UP,       pygame.K_w: UP,
    pygame.K_DOWN: DOWN,   pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,   pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT, pygame.K_d: RIGHT,
}

DIFFICULTY_KEYS = {
    pygame.K_1: "easy",
    pygame.K_2: "medium",
    pygame.K_3: "hard",
}

# Drags shorter than this (px) are clicks, not swipes
MIN_SWIPE = 10


# ---------- Helpers ----------
def cell_rect(gx: int, gy: int, inset: int = 0) -> pygame.Rect:
    return pygame.Rect(
        gx * CELL_SIZE + inset,
        gy * CELL_SIZE + inset + HUD_HEIGHT,
        CELL_SIZE - 2 * inset,
        CELL_SIZE - 2 * inset,
    )

def swipe_direction(dx: float, dy: float) -> Optional[Tuple[int, int]]:
    """Map a drag vector to a direction; the longer axis wins."""
    if dx == 0 and dy == 0:
        return None
    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


# ---------- Input ----------
class InputHandler:
    """Translates pygame events into engine/scheduler calls."""

    def __init__(self, engine: SimulationEngine, scheduler: TickScheduler) -> None:
        self.engine = engine
        self.scheduler = scheduler
        self._drag_start: Optional[Tuple[int, int]] = None

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Process one event. Return False to quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            return self._on_key(event.key)
        if event.type == pygame.MOUSEBUTTONDOWN:
            self._drag_start = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and self._drag_start is not None:
            sx, sy = self._drag_start
            self._drag_start = None
            dx, dy = event.pos[0] - sx, event.pos[1] - sy
            if math.hypot(dx, dy) >= MIN_SWIPE:
                d = swipe_direction(dx, dy)
                if d is not None:
                    self.engine.set_desired_direction(d)
        return True

    def _on_key(self, key: int) -> bool:
        engine = self.engine
        if key == pygame.K_ESCAPE:
            return False
        if key in DIFFICULTY_KEYS:
            self.scheduler.set_difficulty(DIFFICULTY_KEYS[key])
            return True
        if key == pygame.K_r:
            engine.reset()
            return True
        # Any other key starts a new game from the title/game-over screens
        if engine.state in (GameState.IDLE, GameState.GAME_OVER):
            engine.start()
            return True
        if key == pygame.K_SPACE:
            engine.toggle_pause()
        elif key in KEYMAP:
            engine.set_desired_direction(KEYMAP[key])
        return True


# ---------- Draw ----------
def draw_game(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot, now_ms: int) -> None:
    screen.fill(BG)
    width, height = screen.get_size()

    # grid
    top = HUD_HEIGHT
    for i in range(snap.grid_size + 1):
        pygame.draw.line(screen, GRID_LINE, (i * CELL_SIZE, top), (i * CELL_SIZE, height))
        pygame.draw.line(screen, GRID_LINE, (0, top + i * CELL_SIZE), (width, top + i * CELL_SIZE))

    # snake, body first so the head is drawn on top
    for x, y in snap.snake[1:]:
        pygame.draw.rect(screen, BODY, cell_rect(x, y, inset=2), border_radius=4)
    hx, hy = snap.head
    pygame.draw.rect(screen, HEAD, cell_rect(hx, hy, inset=2), border_radius=4)

    # food, pulsing with wall-clock time rather than ticks
    pulse = math.sin(now_ms / 500) * 2 + CELL_SIZE - 4
    fx, fy = snap.food
    center = cell_rect(fx, fy).center
    pygame.draw.circle(screen, FOOD, center, max(1, int(pulse / 2)))

    # score
    txt = font.render(f"Score: {snap.score}   Best: {snap.high_score}", True, TEXT)
    screen.blit(txt, (8, 8))

def draw_overlay(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot, difficulty: str) -> None:
    if snap.state is GameState.PLAYING:
        return

    if snap.state is GameState.IDLE:
        lines = ["SNAKE", "Press any key to start", f"Difficulty: {difficulty} (1/2/3)"]
    elif snap.state is GameState.PAUSED:
        lines = ["PAUSED", "Press Space to resume"]
    else:
        lines = ["GAME OVER", f"Score: {snap.score}", "Press any key to play again"]

    width, height = screen.get_size()

    # Dim with translucent overlay
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill(OVERLAY)
    screen.blit(overlay, (0, 0))

    y = height // 2 - 16 * (len(lines) - 1)
    for line in lines:
        surf = font.render(line, True, OVERLAY_TEXT)
        screen.blit(surf, surf.get_rect(center=(width // 2, y)))
        y += 32
