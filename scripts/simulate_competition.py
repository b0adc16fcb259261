# scripts/simulate_competition.py
from __future__ import annotations

import argparse
import logging
import os
from datetime import date
from fractions import Fraction
from pathlib import Path
from typing import List, Optional

import numpy as np

from tourney.competition import Competition
from tourney.config import DATA_DIR
from tourney.draw import DrawGenerator
from tourney.models import FifthSetTieBreakRule, Level, Surface
from tourney.monte_carlo import run_simulations
from tourney.storage import load_matches, load_players, save_competition


def parse_seed_rate(value: str) -> Fraction:
    """
    Accepts "0", "1/8" or "0.125".
    """
    return Fraction(value)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Simulate a seeded single-elimination tennis competition.")
    p.add_argument("--players", type=str, default=str(DATA_DIR / "sample_players.json"))
    p.add_argument("--draw-size", type=int, default=16, choices=(8, 16, 32, 64, 128))
    p.add_argument("--seed-rate", type=parse_seed_rate, default=Fraction(1, 4))
    p.add_argument("--surface", type=str, default="HARD", choices=[s.name for s in Surface])
    p.add_argument("--level", type=str, default="GRAND_SLAM", choices=[lv.name for lv in Level])
    p.add_argument("--best-of", type=int, default=None, choices=(3, 5))
    p.add_argument("--final-best-of", type=int, default=None, choices=(3, 5))
    p.add_argument("--fifth-set-rule", type=str, default="AT_12_12",
                   choices=[r.name for r in FifthSetTieBreakRule])
    p.add_argument("--date", type=date.fromisoformat, default=date(2019, 3, 4))
    p.add_argument("--history-years", type=int, default=5,
                   help="Years of match history loaded before --date")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--runs", type=int, default=1, help="Monte Carlo runs; 1 prints the full draw")
    p.add_argument("--top", type=int, default=10, help="Leaders printed after Monte Carlo runs")
    p.add_argument("--by-game", action="store_true", help="Resolve whole games instead of points")
    p.add_argument("--out", type=str, default=None, help="Save the competition as JSON (single run)")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    path = Path(args.players)
    players = load_players(path, count=args.draw_size)
    history_start = args.date.replace(year=args.date.year - args.history_years)
    for player in players:
        load_matches(path, player, date_min=history_start, date_max=args.date)

    rng = np.random.default_rng(args.seed)
    draw_generator = DrawGenerator(args.draw_size, args.seed_rate)

    settings = dict(
        date=args.date,
        level=Level[args.level],
        fifth_set_rule=FifthSetTieBreakRule[args.fifth_set_rule],
        surface=Surface[args.surface],
        best_of=args.best_of,
        final_best_of=args.final_best_of,
        point_by_point=not args.by_game,
    )

    if args.runs > 1:
        summary = run_simulations(players, draw_generator, args.runs, rng, progress=True, **settings)
        names = {pl.id: pl.name for pl in players}
        print(f"{'Player':<30}{'Titles':>10}{'Share (%)':>12}")
        print("-" * 52)
        for player_id, titles in summary.leaders(args.top):
            print(f"{names[player_id]:<30}{titles:>10}{summary.title_share(player_id):>12.3f}")
        return 0

    competition = Competition(draw_generator, players=players, rng=rng, **settings)
    competition.run_to_end()

    for round, matches in competition.draw.items():
        print(f"== {round.name} ==")
        for match in matches:
            print(f"  {match}")
    print(f"Winner: {competition.winner}")

    if args.out:
        save_competition(Path(args.out), competition)
        print(f"[INFO] Saved: {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
