from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from tourney.models import Level, MatchArchive, Round, StatCategory, Surface

StatMap = Dict[StatCategory, Dict[Any, Optional[float]]]

_CATEGORY_KEYS: Dict[StatCategory, Callable[[MatchArchive, int], Any]] = {
    StatCategory.LEVEL: lambda m, _: m.level,
    StatCategory.ROUND: lambda m, _: m.round,
    StatCategory.BEST_OF: lambda m, _: m.best_of,
    StatCategory.YEAR: lambda m, _: m.date.year,
    StatCategory.OPPONENT: lambda m, pid: m.opponent_of(pid),
    StatCategory.SURFACE: lambda m, _: m.surface,
}


def _ratio(numerator: int, denominator: int) -> Optional[float]:
    return numerator / denominator if denominator else None


class Player:
    """
    A ranked player and the statistics derived from their match history.

    Identity fields never change. Statistic maps are rebuilt each time
    the history is set, and map a category value to None when the
    history holds no usable data for it.
    """

    def __init__(self, id: int, name: str, date_of_birth: Optional[date] = None):
        self.id = id
        self.name = name
        self.date_of_birth = date_of_birth

        self._history: Tuple[MatchArchive, ...] = ()
        self.history_loaded = False
        self.win_rates: StatMap = {c: {} for c in StatCategory}
        self.hold_rates: StatMap = {c: {} for c in StatCategory}
        self.tie_break_rates: StatMap = {c: {} for c in StatCategory}

    @property
    def match_history(self) -> Tuple[MatchArchive, ...]:
        return self._history

    def set_match_history(self, matches: Iterable[MatchArchive]):
        self._history = tuple(m for m in matches if m is not None and m.involves(self.id))
        self.history_loaded = True
        self._compute_statistics()

    def filter_match_history(
        self,
        surface: Optional[Surface] = None,
        level: Optional[Level] = None,
        round: Optional[Round] = None,
        opponent_id: Optional[int] = None,
        best_of: Optional[int] = None,
        date_min: Optional[date] = None,
        date_max: Optional[date] = None,
    ) -> List[MatchArchive]:
        matches = []
        for m in self._history:
            if surface is not None and m.surface != surface:
                continue
            if level is not None and m.level != level:
                continue
            if round is not None and m.round != round:
                continue
            if opponent_id is not None and opponent_id != self.id and not m.involves(opponent_id):
                continue
            if best_of is not None and m.best_of != best_of:
                continue
            if date_min is not None and m.date < date_min:
                continue
            if date_max is not None and m.date > date_max:
                continue
            matches.append(m)
        return matches

    def _compute_statistics(self):
        for category, key_of in _CATEGORY_KEYS.items():
            wins = defaultdict(lambda: [0, 0])
            holds = defaultdict(lambda: [0, 0])
            tie_breaks = defaultdict(lambda: [0, 0])

            for m in self._history:
                key = key_of(m, self.id)

                wins[key][0] += m.winner_id == self.id
                wins[key][1] += 1

                record = m.serve_record(self.id)
                if record is not None:
                    holds[key][0] += record.games_held
                    holds[key][1] += record.games_played

                played, won = m.tie_breaks(self.id)
                tie_breaks[key][0] += won
                tie_breaks[key][1] += played

            self.win_rates[category] = {k: _ratio(*v) for k, v in wins.items()}
            self.hold_rates[category] = {k: _ratio(*holds[k]) for k in wins}
            self.tie_break_rates[category] = {k: _ratio(*tie_breaks[k]) for k in wins}

    @staticmethod
    def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
        first = (first_name or "").strip()
        last = (last_name or "").strip()
        if first and last:
            return f"{last}, {first}"
        return last or first

    def __repr__(self):
        return f"Player(id={self.id!r}, name={self.name!r})"

    def __str__(self):
        return self.name
