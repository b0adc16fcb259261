from typing import List, Optional, Tuple

from tourney.config import BEST_OF_VALUES
from tourney.exceptions import (
    MatchFinishedError,
    NotInTieBreakError,
    PreconditionError,
    TieBreakInProgressError,
    WrongScoringModeError,
    check_side,
)
from tourney.models import FifthSetTieBreakRule, PointOutcome
from tourney.set_score import SetScore


class Scoreboard:
    """
    Scoreboard of a tennis match.

    Responsibilities:
    - Sequence sets until one side holds a majority of best_of
    - Own the server rotation (games and tie-breaks)
    - Expose either point-level or game-level mutators, never both
    - Derive the current leader and a textual score
    """

    def __init__(
        self,
        best_of: int = 3,
        fifth_set_rule: FifthSetTieBreakRule = FifthSetTieBreakRule.NONE,
        receiver_serves_first: bool = False,
        point_by_point: bool = True,
    ):
        if best_of not in BEST_OF_VALUES:
            raise PreconditionError(f"best_of must be one of {BEST_OF_VALUES}, got {best_of}")

        self.best_of = best_of
        self.fifth_set_rule = fifth_set_rule
        self.point_by_point = point_by_point

        self._sets: List[SetScore] = [SetScore()]
        self._server = 1 if receiver_serves_first else 0
        self._tie_break_first_server: Optional[int] = None
        self._finished = False

    # =========================================================
    # PUBLIC API
    # =========================================================

    def add_server_point(self) -> PointOutcome:
        self._require_mode(point_by_point=True)
        return self._add_point(self._server)

    def add_receiver_point(self) -> PointOutcome:
        self._require_mode(point_by_point=True)
        return self._add_point(1 - self._server)

    def add_server_game(self):
        self._add_game(self._server)

    def add_receiver_game(self):
        self._add_game(1 - self._server)

    def add_tie_break(self, side: int):
        """
        Gives the whole current tie-break (and so the set) to `side`.
        """
        check_side(side)
        self._require_mode(point_by_point=False)
        self._require_open()

        if not self.is_currently_tie_break:
            raise NotInTieBreakError("No tie-break is being played")

        while not self._add_point(side).new_game:
            pass

    # =========================================================
    # DERIVED STATE
    # =========================================================

    @property
    def sets(self) -> Tuple[SetScore, ...]:
        return tuple(self._sets)

    @property
    def current_set(self) -> SetScore:
        return self._sets[-1]

    @property
    def server_index(self) -> int:
        return self._server

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def is_currently_tie_break(self) -> bool:
        return self.current_set.is_tie_break and not self.current_set.is_finished

    @property
    def sets_to_win(self) -> int:
        return (self.best_of + 1) // 2

    @property
    def sets_won(self) -> Tuple[int, int]:
        return (
            sum(1 for s in self._sets if s.winner == 0),
            sum(1 for s in self._sets if s.winner == 1),
        )

    @property
    def winner_index(self) -> Optional[int]:
        if not self._finished:
            return None
        return self.current_set.winner

    @property
    def index_lead(self) -> int:
        """
        Index of the side currently ahead, or -1 when level.

        Sets won decide first, then games of the current set, then the
        current tie-break or game.
        """
        comparisons = [self.sets_won, self.current_set.games]

        if self.current_set.is_tie_break:
            comparisons.append(self.current_set.tie_break_points)
        else:
            game = self.current_set.current_game
            comparisons.append(game.points)
            comparisons.append((game.advantage == 0, game.advantage == 1))

        for a, b in comparisons:
            if a != b:
                return 0 if a > b else 1

        return -1

    # =========================================================
    # INTERNALS
    # =========================================================

    def _require_mode(self, point_by_point: bool):
        if self.point_by_point != point_by_point:
            expected = "point-by-point" if point_by_point else "game-by-game"
            raise WrongScoringModeError(f"This operation requires a {expected} scoreboard")

    def _require_open(self):
        if self._finished:
            raise MatchFinishedError()

    def _add_game(self, side: int):
        self._require_mode(point_by_point=False)
        self._require_open()

        if self.is_currently_tie_break:
            raise TieBreakInProgressError("Use add_tie_break while a tie-break is played")

        while not self._add_point(side).new_game:
            pass

    def _add_point(self, side: int) -> PointOutcome:
        self._require_open()

        current = self.current_set
        tie_break_before = current.is_tie_break

        outcome = current.add_point(
            side,
            is_fifth_set=len(self._sets) == 5,
            fifth_set_rule=self.fifth_set_rule,
        )

        if outcome.switch_server:
            self._server = 1 - self._server

        if current.is_tie_break and not tie_break_before:
            self._tie_break_first_server = self._server

        if outcome.set_over:
            if current.is_tie_break:
                self._server = 1 - self._tie_break_first_server
                self._tie_break_first_server = None
            self._close_set(side)

        return outcome

    def _close_set(self, side: int):
        if self.sets_won[side] == self.sets_to_win:
            self._finished = True
        else:
            self._sets.append(SetScore())

    # =========================================================
    # RENDERING
    # =========================================================

    def __str__(self):
        text = " ".join(str(s) for s in self._sets)

        if self._finished:
            return text

        current = self.current_set
        if current.is_tie_break:
            a, b = current.tie_break_points
            return f"{text} | [{a}]-[{b}]"

        return f"{text} | {current.current_game}"
