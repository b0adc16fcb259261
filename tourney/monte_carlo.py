import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from tourney.competition import Competition
from tourney.draw import DrawGenerator
from tourney.exceptions import PreconditionError
from tourney.models import Round
from tourney.player import Player

logger = logging.getLogger(__name__)


@dataclass
class SimulationSummary:
    runs: int = 0
    titles: Counter = field(default_factory=Counter)
    round_wins: Dict[int, Counter] = field(default_factory=lambda: defaultdict(Counter))

    def record(self, competition: Competition):
        self.runs += 1
        self.titles[competition.winner.id] += 1
        for round, matches in competition.draw.items():
            for match in matches:
                if not match.is_bye:
                    self.round_wins[match.winner.id][round] += 1

    def title_share(self, player_id: int) -> float:
        if not self.runs:
            return 0.0
        return round(self.titles[player_id] / self.runs * 100, 3)

    def wins_in(self, player_id: int, round: Round) -> int:
        return self.round_wins.get(player_id, Counter())[round]

    def leaders(self, n: int = 10) -> List[Tuple[int, int]]:
        return sorted(self.titles.items(), key=lambda kv: (-kv[1], kv[0]))[:n]


def run_simulations(
    players: Sequence[Player],
    draw_generator: DrawGenerator,
    runs: int,
    rng: np.random.Generator,
    progress: bool = False,
    **competition_kwargs,
) -> SimulationSummary:
    """
    Plays `runs` full competitions on the same rng and tallies results.

    `competition_kwargs` are forwarded to Competition (date, level,
    surface, fifth_set_rule, best_of, final_best_of, point_by_point).
    """
    if runs < 1:
        raise PreconditionError("runs must be positive")

    summary = SimulationSummary()

    iterations = range(runs)
    if progress:
        iterations = tqdm(iterations, desc="Simulating", unit="draw")

    for _ in iterations:
        competition = Competition(draw_generator, players=players, rng=rng, **competition_kwargs)
        competition.run_to_end()
        summary.record(competition)

    logger.info("Monte Carlo complete: %d runs, %d distinct winners", runs, len(summary.titles))
    return summary
