from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

import numpy as np

from tourney.draw import DrawGenerator
from tourney.exceptions import DuplicatePlayerError, InvariantViolationError, PreconditionError
from tourney.match import Match
from tourney.models import FifthSetTieBreakRule, Level, Round, Surface
from tourney.player import Player

logger = logging.getLogger(__name__)


class Competition:
    """
    Single-elimination competition driven round by round.

    The draw maps each played round to its matches, earliest round
    first. The competition is finished once the final has a winner.
    """

    def __init__(
        self,
        draw_generator: DrawGenerator,
        date: date,
        level: Level,
        fifth_set_rule: FifthSetTieBreakRule,
        surface: Surface,
        players: Sequence[Player],
        rng: np.random.Generator,
        best_of: Optional[int] = None,
        final_best_of: Optional[int] = None,
        point_by_point: bool = True,
    ):
        if draw_generator is None:
            raise PreconditionError("A draw generator is required")

        players = list(players)
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise DuplicatePlayerError("The list of players should not contain duplicates")

        if len(players) < 2:
            raise PreconditionError("A competition needs at least two players")

        self.draw_size = draw_generator.draw_size
        self.date = date
        self.level = level
        self.surface = surface
        self.fifth_set_rule = fifth_set_rule
        self.best_of = best_of or level.default_best_of
        self.final_best_of = final_best_of or self.best_of
        self.point_by_point = point_by_point
        self._rng = rng

        entrants = players[:self.draw_size]
        first_round = Round.for_draw_size(self.draw_size)

        pairings = draw_generator.generate_draw(rng, player_count=len(entrants))
        matches = [
            self._new_match(
                entrants[a],
                entrants[b] if b is not None else None,
                first_round,
            )
            for a, b in pairings
        ]

        if len(matches) != first_round.match_count:
            raise InvariantViolationError(
                f"{first_round.name} expects {first_round.match_count} matches, got {len(matches)}"
            )

        self._draw: Dict[Round, List[Match]] = {first_round: matches}

    # =========================================================
    # STATE
    # =========================================================

    @property
    def draw(self) -> Dict[Round, List[Match]]:
        return {r: list(m) for r, m in self._draw.items()}

    @property
    def current_round(self) -> Round:
        return next(reversed(self._draw))

    @property
    def is_finished(self) -> bool:
        round = self.current_round
        return round == Round.F and self._draw[round][0].winner is not None

    @property
    def winner(self) -> Optional[Player]:
        if not self.is_finished:
            return None
        return self._draw[Round.F][0].winner

    def best_of_for(self, round: Round) -> int:
        return self.final_best_of if round == Round.F else self.best_of

    # =========================================================
    # PROGRESSION
    # =========================================================

    def next_round(self):
        """
        Plays every match of the current round, then draws the next one
        from adjacent winners. Does nothing once finished.
        """
        if self.is_finished:
            return

        round = self.current_round
        matches = self._draw[round]

        if not matches:
            raise InvariantViolationError(f"Round {round.name} has no match")

        for match in matches:
            match.run_to_end()

        logger.info("Round %s completed (%d matches)", round.name, len(matches))

        if self.is_finished:
            logger.info("Competition won by %s", self.winner)
            return

        next_round = round.next_round
        winners = [m.winner for m in matches]

        next_matches = [
            self._new_match(winners[i], winners[i + 1], next_round)
            for i in range(0, len(winners) - 1, 2)
        ]

        if len(next_matches) != (len(matches) + 1) // 2:
            raise InvariantViolationError(
                f"Round {next_round.name} expects {(len(matches) + 1) // 2} matches, got {len(next_matches)}"
            )

        self._draw[next_round] = next_matches

    def run_to_end(self) -> Player:
        while not self.is_finished:
            self.next_round()
        return self.winner

    def _new_match(self, player_one, player_two, round: Round) -> Match:
        return Match(
            player_one,
            player_two,
            best_of=self.best_of_for(round),
            fifth_set_rule=self.fifth_set_rule,
            surface=self.surface,
            level=self.level,
            round=round,
            date=self.date,
            rng=self._rng,
            point_by_point=self.point_by_point,
        )
