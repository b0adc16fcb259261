"""
Outcome probability model.

Turns a player's precomputed statistic maps into the two numbers a
simulated match needs: how often the player holds serve, and how often
they win a tie-break, in the context of one upcoming match.
"""
import logging
from typing import Optional, Tuple

import numpy as np

from tourney.config import (
    DEFAULT_HOLD_RATE,
    DEFAULT_TIE_BREAK_RATE,
    RATE_BOUNDS,
    SLICE_WEIGHTS,
)
from tourney.models import MatchContext, StatCategory
from tourney.player import Player, StatMap

logger = logging.getLogger(__name__)


def _slice_keys(opponent: Player, context: MatchContext):
    return (
        (StatCategory.LEVEL, context.level, SLICE_WEIGHTS["level"]),
        (StatCategory.ROUND, context.round, SLICE_WEIGHTS["round"]),
        (StatCategory.BEST_OF, context.best_of, SLICE_WEIGHTS["best_of"]),
        (StatCategory.YEAR, context.year, SLICE_WEIGHTS["year"]),
        (StatCategory.OPPONENT, opponent.id, SLICE_WEIGHTS["opponent"]),
        (StatCategory.SURFACE, context.surface, SLICE_WEIGHTS["surface"]),
    )


def weighted_rate(stats: StatMap, opponent: Player, context: MatchContext, default: float) -> float:
    """
    Average of slice rate x slice weight over the slices holding data.

    Slices without data are skipped and do not count in the divisor.
    With no data at all, `default` is returned unchanged.
    """
    values = []
    for category, key, weight in _slice_keys(opponent, context):
        rate: Optional[float] = stats.get(category, {}).get(key)
        if rate is not None:
            values.append(rate * float(weight))

    if not values:
        return default

    return float(np.clip(np.mean(values), *RATE_BOUNDS))


def hold_rate(player: Player, opponent: Player, context: MatchContext) -> float:
    return weighted_rate(player.hold_rates, opponent, context, DEFAULT_HOLD_RATE)


def tie_break_rate(player: Player, opponent: Player, context: MatchContext) -> float:
    return weighted_rate(player.tie_break_rates, opponent, context, DEFAULT_TIE_BREAK_RATE)


def compute_rates(player: Player, opponent: Player, context: MatchContext) -> Tuple[float, float]:
    """
    Returns (hold rate, tie-break rate) for `player` facing `opponent`.
    """
    rates = hold_rate(player, opponent, context), tie_break_rate(player, opponent, context)
    logger.debug(
        "%s vs %s: hold=%.3f tie-break=%.3f", player.name, opponent.name, rates[0], rates[1]
    )
    return rates


def tie_break_probability(p1_rate: float, p2_rate: float) -> float:
    """
    Probability that the first player wins a tie-break against the second.
    """
    total = p1_rate + p2_rate
    if total == 0:
        return 0.5
    return p1_rate / total
