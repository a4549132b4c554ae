# main.py
from __future__ import annotations
import argparse
import logging
import random

import pygame # type: ignore

from .config import CFG, Config, DIFFICULTIES, window_size
from .engine import SimulationEngine
from .game import InputHandler, draw_game, draw_overlay
from .scheduler import TickScheduler
from .storage import HighScoreStore

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> Config:
    parser = argparse.ArgumentParser(description="Play snake.")
    parser.add_argument("--grid-size", type=int, default=CFG.grid_size)
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTIES), default=CFG.difficulty)
    parser.add_argument("--seed", type=int, default=CFG.seed,
                        help="seed food placement for a reproducible game")
    parser.add_argument("--highscore-path", default=CFG.highscore_path)
    parser.add_argument("--fps", type=int, default=CFG.fps)
    parser.add_argument("--log-level", default=CFG.log_level)
    args = parser.parse_args(argv)
    return Config(
        seed=args.seed,
        grid_size=args.grid_size,
        difficulty=args.difficulty,
        highscore_path=args.highscore_path,
        fps=args.fps,
        log_level=args.log_level,
    )


def main(argv: list[str] | None = None) -> None:
    cfg = parse_args(argv)
    logging.basicConfig(
        level=cfg.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = HighScoreStore(cfg.highscore_path)
    engine = SimulationEngine(cfg.grid_size, store=store, rng=random.Random(cfg.seed))
    scheduler = TickScheduler(engine, difficulty=cfg.difficulty)
    handler = InputHandler(engine, scheduler)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode(window_size(cfg.grid_size))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()
    logger.info("High score loaded: %d", engine.high_score)

    running = True
    while running:
        # 1) input
        for event in pygame.event.get():
            if not handler.handle_event(event):
                running = False
                break
        if not running:
            break

        # 2) update: ticks are gated by the scheduler, not the frame rate
        now = pygame.time.get_ticks()
        scheduler.on_frame(now)

        # 3) render every frame
        snap = engine.snapshot()
        draw_game(screen, font, snap, now)
        draw_overlay(screen, font, snap, scheduler.difficulty)
        pygame.display.flip()
        clock.tick(cfg.fps)

    pygame.quit()

if __name__ == "__main__":
    main()
