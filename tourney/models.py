from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from tourney.config import BEST_OF_VALUES, MAX_ARCHIVE_SETS
from tourney.exceptions import InvalidArchiveError, PreconditionError


class Surface(enum.IntEnum):
    GRASS = 1
    CLAY = 2
    HARD = 3
    CARPET = 4


class Level(enum.IntEnum):
    GRAND_SLAM = 1
    DAVIS_CUP = 2
    ATP_FINALS = 3
    ATP_TOUR = 4
    MASTERS_1000 = 5
    OLYMPICS = 6
    ATP_500 = 7
    NEXT_GEN_FINALS = 9
    GRAND_SLAM_CUP = 11

    @property
    def default_best_of(self) -> int:
        return 5 if self in (Level.GRAND_SLAM, Level.DAVIS_CUP) else 3


# Smallest draw size for which each round is the opening round.
_FIRST_ROUND_THRESHOLDS = (
    (65, "R128"),
    (33, "R64"),
    (17, "R32"),
    (9, "R16"),
    (5, "QF"),
    (3, "SF"),
    (2, "F"),
)


class Round(enum.IntEnum):
    """Knockout rounds, numbered from the final upwards."""

    F = 1
    SF = 2
    QF = 3
    R16 = 4
    R32 = 5
    R64 = 6
    R128 = 7
    # archive data only
    RR = 8
    BR = 9

    @property
    def is_knockout(self) -> bool:
        return self <= Round.R128

    @property
    def next_round(self) -> "Round":
        if not self.is_knockout or self == Round.F:
            raise PreconditionError(f"No round follows {self.name}")
        return Round(self - 1)

    @property
    def match_count(self) -> int:
        return 2 ** (self - 1)

    @classmethod
    def for_draw_size(cls, draw_size: int) -> "Round":
        if draw_size < 2 or draw_size > 128:
            raise PreconditionError(f"Draw size must be between 2 and 128, got {draw_size}")
        for threshold, name in _FIRST_ROUND_THRESHOLDS:
            if draw_size >= threshold:
                return cls[name]
        raise AssertionError("unreachable")


class FifthSetTieBreakRule(enum.Enum):
    NONE = "none"
    AT_6_6 = "6-6"
    AT_12_12 = "12-12"


class StatCategory(enum.Enum):
    LEVEL = "level"
    ROUND = "round"
    BEST_OF = "best_of"
    YEAR = "year"
    OPPONENT = "opponent"
    SURFACE = "surface"


@dataclass(frozen=True)
class PointOutcome:
    set_over: bool = False
    switch_server: bool = False
    new_game: bool = False


@dataclass(frozen=True)
class ArchivedSet:
    """
    One set of an archived match, from the match winner's point of view.
    """
    winner_games: int
    loser_games: int
    tie_break_loser_points: Optional[int] = None

    @property
    def has_tie_break(self) -> bool:
        if self.tie_break_loser_points is not None:
            return True
        return {self.winner_games, self.loser_games} == {7, 6}

    @property
    def won_by_match_winner(self) -> bool:
        return self.winner_games > self.loser_games


@dataclass(frozen=True)
class ServeRecord:
    games_played: int
    games_held: int


@dataclass
class MatchArchive:
    """
    Historical match, read-only input to the probability model.
    """
    surface: Surface
    level: Level
    round: Round
    best_of: int
    date: date
    winner_id: int
    loser_id: int
    sets: List[ArchivedSet] = field(default_factory=list)
    winner_serve: Optional[ServeRecord] = None
    loser_serve: Optional[ServeRecord] = None

    def __post_init__(self):
        if self.winner_id == self.loser_id:
            raise InvalidArchiveError("winner_id and loser_id must differ")

        if self.best_of not in BEST_OF_VALUES:
            raise InvalidArchiveError(f"best_of must be one of {BEST_OF_VALUES}")

        if len(self.sets) > MAX_ARCHIVE_SETS:
            raise InvalidArchiveError(
                f"An archive holds at most {MAX_ARCHIVE_SETS} sets, got {len(self.sets)}"
            )

        for s in self.sets:
            if s.winner_games < 0 or s.loser_games < 0:
                raise InvalidArchiveError("Set games must be non-negative")

        for record in (self.winner_serve, self.loser_serve):
            if record is not None and not 0 <= record.games_held <= record.games_played:
                raise InvalidArchiveError("Service games held must be within games played")

    def involves(self, player_id: int) -> bool:
        return player_id in (self.winner_id, self.loser_id)

    def opponent_of(self, player_id: int) -> int:
        return self.loser_id if player_id == self.winner_id else self.winner_id

    def serve_record(self, player_id: int) -> Optional[ServeRecord]:
        return self.winner_serve if player_id == self.winner_id else self.loser_serve

    def tie_breaks(self, player_id: int) -> Tuple[int, int]:
        """
        Returns (played, won) tie-breaks for the given player.
        """
        played = won = 0
        for s in self.sets:
            if not s.has_tie_break:
                continue
            played += 1
            if s.won_by_match_winner == (player_id == self.winner_id):
                won += 1
        return played, won


@dataclass(frozen=True)
class MatchContext:
    surface: Surface
    level: Level
    round: Round
    best_of: int
    year: int


@dataclass(frozen=True)
class MatchSnapshot:
    point_index: int
    sets_won: Tuple[int, int]
    games: Tuple[int, int]
    score: str
    server_index: int
    leader_index: int
    is_finished: bool
