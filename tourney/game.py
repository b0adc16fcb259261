from typing import Optional, Tuple

from tourney.config import GAME_POINTS
from tourney.exceptions import MatchFinishedError, check_side


class Game:
    """
    Point score of a single (non tie-break) game.

    Points move through 0, 15, 30, 40. At 40-40 the game is at deuce;
    the next point grants advantage, and a point by the player holding
    advantage closes the game.
    """

    def __init__(self):
        self._points = [GAME_POINTS[0], GAME_POINTS[0]]
        self._advantage: Optional[int] = None
        self._winner: Optional[int] = None

    @property
    def points(self) -> Tuple[int, int]:
        return self._points[0], self._points[1]

    @property
    def advantage(self) -> Optional[int]:
        return self._advantage

    @property
    def is_deuce(self) -> bool:
        return (
            self._advantage is None
            and self._points[0] == GAME_POINTS[-1]
            and self._points[1] == GAME_POINTS[-1]
        )

    @property
    def is_finished(self) -> bool:
        return self._winner is not None

    @property
    def winner(self) -> Optional[int]:
        return self._winner

    def add_point(self, side: int) -> bool:
        """
        Adds a point for `side`. Returns True if the game just ended.
        """
        check_side(side)

        if self.is_finished:
            raise MatchFinishedError("game")

        opponent = 1 - side

        if self._advantage == side:
            return self._close(side)

        if self._advantage == opponent:
            self._advantage = None
            return False

        if self.is_deuce:
            self._advantage = side
            return False

        if self._points[side] == GAME_POINTS[-1]:
            return self._close(side)

        self._points[side] = GAME_POINTS[GAME_POINTS.index(self._points[side]) + 1]
        return False

    def _close(self, side: int) -> bool:
        self._winner = side
        self._advantage = None
        return True

    def __str__(self):
        left = f"{self._points[0]}{' (A)' if self._advantage == 0 else ''}"
        right = f"{self._points[1]}{' (A)' if self._advantage == 1 else ''}"
        return f"{left} - {right}"
