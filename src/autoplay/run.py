# src/autoplay/run.py
from __future__ import annotations
import argparse
import csv
import logging
import os

import numpy as np  # type: ignore

from gridsnake.config import GRID_SIZE
from autoplay.policies import POLICIES
from autoplay.soak import SoakDriver

logger = logging.getLogger(__name__)


def soak(driver: SoakDriver, policy: str, episodes: int, max_ticks: int = 10_000):
    """Play `episodes` games with a named policy and return their results."""
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")
    choose = POLICIES[policy]

    results = []
    for ep in range(1, episodes + 1):
        res = driver.run_episode(choose, max_ticks=max_ticks)
        logger.info("ep=%d ticks=%d score=%d length=%d %s", ep, res.ticks, res.score, res.length, res.outcome)
        results.append(res)
    return results


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Soak-test the snake engine with scripted players.")
    parser.add_argument("--episodes", type=int, default=50)
    parser.add_argument("--policy", type=str, default="mixed", choices=sorted(POLICIES))
    parser.add_argument("--max-ticks", type=int, default=10_000, help="cut a game off after this many ticks")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--grid-size", type=int, default=GRID_SIZE)
    parser.add_argument("--outdir", type=str, default="data/soak", help="CSV is saved here")
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    driver = SoakDriver(grid_size=args.grid_size, seed=args.seed)
    results = soak(driver, args.policy, args.episodes, args.max_ticks)

    os.makedirs(args.outdir, exist_ok=True)
    out_csv = os.path.join(args.outdir, f"soak_{args.policy}.csv")
    with open(out_csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(("ep", "ticks", "score", "length", "outcome"))
        for ep, res in enumerate(results, start=1):
            writer.writerow((ep, res.ticks, res.score, res.length, res.outcome))

    scores = np.array([r.score for r in results])
    ticks = int(np.sum([r.ticks for r in results]))
    logger.info(
        "%d ticks checked; score mean=%.1f max=%d; best %d; saved %s",
        ticks, scores.mean() if scores.size else 0.0, scores.max(initial=0),
        driver.engine.high_score, out_csv,
    )


if __name__ == "__main__":
    main()
