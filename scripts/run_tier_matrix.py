#!/usr/bin/env python3
from __future__ import annotations

import argparse
import math
import statistics as stats
from dataclasses import dataclass
from typing import List, Tuple

from ttt_duel.arena import run_series
from ttt_duel.config import Tier


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    seeds: int = 5
    games: int = 200


def main() -> int:
    ap = argparse.ArgumentParser(description="X-tier vs O-tier win/draw rates over several seeds")
    ap.add_argument("--seeds", type=int, default=Config.seeds)
    ap.add_argument("--games", type=int, default=Config.games)
    args = ap.parse_args()
    cfg = Config(seeds=args.seeds, games=args.games)

    print(f"| X \\ O | {' | '.join(t.value for t in Tier)} |")
    print("|---" * (len(Tier) + 1) + "|")
    for x_tier in Tier:
        cells = []
        for o_tier in Tier:
            x_rates: List[float] = []
            draw_rates: List[float] = []
            for s in range(cfg.seeds):
                res = run_series(x_tier, o_tier, games=cfg.games, seed=s)
                x_rates.append(res.x_wins / res.games)
                draw_rates.append(res.draws / res.games)
            mx, hx = ci95(x_rates)
            md, _ = ci95(draw_rates)
            cells.append(f"X {mx:.2f}±{hx:.2f} / D {md:.2f}")
        print(f"| {x_tier.value} | {' | '.join(cells)} |")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
