from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Tuple

import numpy as np

from tourney.exceptions import PreconditionError
from tourney.models import FifthSetTieBreakRule, Level, MatchContext, Round, Surface
from tourney.player import Player
from tourney.probability import compute_rates, tie_break_probability
from tourney.scoreboard import Scoreboard

logger = logging.getLogger(__name__)


class Match:
    """
    One simulated match between two players, or a bye.

    Responsibilities:
    - Own the scoreboard and the per-player rates for this context
    - Drive the scoreboard to its end with weighted coin flips
    - Report the winner once decided
    """

    def __init__(
        self,
        player_one: Optional[Player],
        player_two: Optional[Player],
        best_of: int,
        fifth_set_rule: FifthSetTieBreakRule,
        surface: Surface,
        level: Level,
        round: Round,
        date: date,
        rng: np.random.Generator,
        point_by_point: bool = True,
    ):
        if player_one is None and player_two is None:
            raise PreconditionError("A match needs at least one player")

        if player_one is None:
            player_one, player_two = player_two, None

        if player_two is not None and player_one.id == player_two.id:
            raise PreconditionError("Players of a match must differ")

        self.player_one = player_one
        self.player_two = player_two
        self.context = MatchContext(
            surface=surface, level=level, round=round, best_of=best_of, year=date.year
        )
        self.point_by_point = point_by_point
        self._rng = rng

        self.scoreboard: Optional[Scoreboard] = None
        self.hold_rates: Tuple[float, float] = (0.0, 0.0)
        self.tie_break_probability = 0.5

        if self.is_bye:
            return

        self.scoreboard = Scoreboard(
            best_of=best_of,
            fifth_set_rule=fifth_set_rule,
            receiver_serves_first=bool(rng.integers(0, 2)),
            point_by_point=point_by_point,
        )

        p1_hold, p1_tie_break = compute_rates(player_one, player_two, self.context)
        p2_hold, p2_tie_break = compute_rates(player_two, player_one, self.context)
        self.hold_rates = (p1_hold, p2_hold)
        self.tie_break_probability = tie_break_probability(p1_tie_break, p2_tie_break)

    # =========================================================
    # STATE
    # =========================================================

    @property
    def is_bye(self) -> bool:
        return self.player_two is None

    @property
    def players(self) -> Tuple[Player, Optional[Player]]:
        return self.player_one, self.player_two

    @property
    def is_finished(self) -> bool:
        return self.is_bye or self.scoreboard.is_finished

    @property
    def winner(self) -> Optional[Player]:
        if self.is_bye:
            return self.player_one
        if not self.scoreboard.is_finished:
            return None
        return self.players[self.scoreboard.winner_index]

    # =========================================================
    # SIMULATION
    # =========================================================

    def run_to_end(self, on_point: Optional[Callable[[Scoreboard], None]] = None):
        """
        Plays the match out on the rng.

        Point mode decides every point, tie-break points included, with the
        server's hold rate; `tie_break_probability` only settles whole
        tie-breaks in game mode.
        """
        if self.is_bye:
            return

        board = self.scoreboard
        while not board.is_finished:
            if self.point_by_point:
                if self._rng.random() < self.hold_rates[board.server_index]:
                    board.add_server_point()
                else:
                    board.add_receiver_point()
            elif board.is_currently_tie_break:
                board.add_tie_break(0 if self._rng.random() < self.tie_break_probability else 1)
            elif self._rng.random() < self.hold_rates[board.server_index]:
                board.add_server_game()
            else:
                board.add_receiver_game()

            if on_point is not None:
                on_point(board)

        logger.debug("%s: %s", self.context.round.name, self)

    def __str__(self):
        if self.is_bye:
            return f"{self.player_one.name} - (bye)"
        return f"{self.player_one.name} - {self.player_two.name} {self.scoreboard}"
