from typing import Optional, Tuple

from tourney.config import LONG_SET_TIE_BREAK_GAMES, SET_GAMES, TIE_BREAK_POINTS
from tourney.exceptions import MatchFinishedError, check_side
from tourney.game import Game
from tourney.models import FifthSetTieBreakRule, PointOutcome


class SetScore:
    """
    Games of one set, plus the tie-break when one is played.

    Once the tie-break starts, plain game counting stops until the
    tie-break decides the set.
    """

    def __init__(self):
        self._games = [0, 0]
        self._tie_break_points = [0, 0]
        self._tie_break = False
        self._current_game = Game()
        self._winner: Optional[int] = None

    # =========================================================
    # STATE
    # =========================================================

    @property
    def games(self) -> Tuple[int, int]:
        return self._games[0], self._games[1]

    @property
    def tie_break_points(self) -> Tuple[int, int]:
        return self._tie_break_points[0], self._tie_break_points[1]

    @property
    def is_tie_break(self) -> bool:
        return self._tie_break

    @property
    def current_game(self) -> Game:
        return self._current_game

    @property
    def is_finished(self) -> bool:
        return self._winner is not None

    @property
    def winner(self) -> Optional[int]:
        return self._winner

    def is_won_by(self, side: int) -> bool:
        return self._winner == check_side(side)

    @property
    def is_tie_break_over(self) -> bool:
        a, b = self._tie_break_points
        return max(a, b) >= TIE_BREAK_POINTS and abs(a - b) >= 2

    @property
    def is_over_without_tie_break(self) -> bool:
        a, b = self._games
        return max(a, b) >= SET_GAMES and abs(a - b) > 1

    # =========================================================
    # MUTATION
    # =========================================================

    def add_point(
        self,
        side: int,
        is_fifth_set: bool = False,
        fifth_set_rule: FifthSetTieBreakRule = FifthSetTieBreakRule.NONE,
    ) -> PointOutcome:
        check_side(side)

        if self.is_finished:
            raise MatchFinishedError("set")

        if self._tie_break:
            self._tie_break_points[side] += 1

            if self.is_tie_break_over:
                return self._close_game(side, is_fifth_set, fifth_set_rule)

            total = self._tie_break_points[0] + self._tie_break_points[1]
            return PointOutcome(switch_server=total % 2 == 1)

        if self._current_game.add_point(side):
            return self._close_game(side, is_fifth_set, fifth_set_rule)

        return PointOutcome()

    def _close_game(self, side, is_fifth_set, fifth_set_rule) -> PointOutcome:
        self._games[side] += 1
        self._current_game = Game()

        a, b = self._games

        if not self._tie_break:
            if a == b == SET_GAMES and (
                not is_fifth_set or fifth_set_rule == FifthSetTieBreakRule.AT_6_6
            ):
                self._tie_break = True
                return PointOutcome(switch_server=True, new_game=True)

            if (
                a == b == LONG_SET_TIE_BREAK_GAMES
                and is_fifth_set
                and fifth_set_rule == FifthSetTieBreakRule.AT_12_12
            ):
                self._tie_break = True
                return PointOutcome(switch_server=True, new_game=True)

        if self._tie_break or self.is_over_without_tie_break:
            self._winner = side
            # The scoreboard decides who serves after a tie-break.
            return PointOutcome(
                set_over=True,
                switch_server=not self._tie_break,
                new_game=True,
            )

        return PointOutcome(switch_server=True, new_game=True)

    # =========================================================
    # RENDERING
    # =========================================================

    def __str__(self):
        a, b = self._games
        text = f"{a}/{b}"
        if self._tie_break and self.is_finished:
            text += f"[{min(self._tie_break_points)}]"
        return text
