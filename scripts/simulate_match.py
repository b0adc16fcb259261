# scripts/simulate_match.py
from __future__ import annotations

import argparse
import logging
import os
from datetime import date
from pathlib import Path
from typing import List, Optional

import numpy as np

from tourney.config import DATA_DIR, DEFAULT_BEST_OF
from tourney.match import Match
from tourney.models import FifthSetTieBreakRule, Level, Round, Surface
from tourney.player import Player
from tourney.storage import load_matches, load_players


def pick_players(path: Optional[Path], first: int, second: int, until: date) -> List[Player]:
    if path is None:
        return [Player(1, "Player One"), Player(2, "Player Two")]

    players = load_players(path)
    chosen = [players[first], players[second]]
    for p in chosen:
        load_matches(path, p, date_max=until)
    return chosen


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Simulate a single tennis match.")
    p.add_argument("--players", type=str, default=None,
                   help=f"Players JSON file, e.g. {DATA_DIR / 'sample_players.json'}")
    p.add_argument("--first", type=int, default=0, help="Ranking index of the first player")
    p.add_argument("--second", type=int, default=1, help="Ranking index of the second player")
    p.add_argument("--best-of", type=int, default=DEFAULT_BEST_OF, choices=(3, 5))
    p.add_argument("--fifth-set-rule", type=str, default="NONE",
                   choices=[r.name for r in FifthSetTieBreakRule])
    p.add_argument("--surface", type=str, default="HARD", choices=[s.name for s in Surface])
    p.add_argument("--level", type=str, default="ATP_TOUR", choices=[lv.name for lv in Level])
    p.add_argument("--date", type=date.fromisoformat, default=date.today())
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--by-game", action="store_true", help="Resolve whole games instead of points")
    p.add_argument("--verbose", action="store_true", help="Print the score after every step")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    path = Path(args.players) if args.players else None
    player_one, player_two = pick_players(path, args.first, args.second, args.date)

    match = Match(
        player_one,
        player_two,
        best_of=args.best_of,
        fifth_set_rule=FifthSetTieBreakRule[args.fifth_set_rule],
        surface=Surface[args.surface],
        level=Level[args.level],
        round=Round.F,
        date=args.date,
        rng=np.random.default_rng(args.seed),
        point_by_point=not args.by_game,
    )

    print(f"[INFO] {player_one.name}: hold={match.hold_rates[0]:.3f}")
    print(f"[INFO] {player_two.name}: hold={match.hold_rates[1]:.3f}")
    print(f"[INFO] Tie-break probability for {player_one.name}: {match.tie_break_probability:.3f}")

    match.run_to_end(on_point=(lambda board: print(board)) if args.verbose else None)

    print(match)
    print(f"Winner: {match.winner}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
