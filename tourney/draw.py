"""
Seeded single-elimination draw generation.

Players are identified by their ranking index (0 is the best ranked).
A generated draw is an ordered list of pairs; placing the pairs left to
right into the bracket leaves yields a bracket where seeds are spread
as far apart as their tier allows.
"""
from __future__ import annotations

import logging
from fractions import Fraction
from typing import List, Optional, Tuple

import numpy as np

from tourney.config import MAX_DRAW_SIZE, MAX_SEED_RATE, MIN_DRAW_SIZE
from tourney.exceptions import (
    InvalidDrawSizeError,
    InvalidSeedRateError,
    InvariantViolationError,
    PlayerPoolError,
)

logger = logging.getLogger(__name__)

Pairing = Tuple[int, Optional[int]]


def is_power_of_two(number: int) -> bool:
    return number > 1 and number & (number - 1) == 0


def _validate_seed_rate(seed_rate, draw_size: int) -> Fraction:
    if seed_rate == 0:
        return Fraction(0)

    if seed_rate < 0 or seed_rate > MAX_SEED_RATE:
        raise InvalidSeedRateError(f"Seed rate must be between 0 and 1/2, got {seed_rate}")

    inverse = 1 / seed_rate
    rounded = round(inverse)
    if abs(inverse - rounded) > 1e-9 or not is_power_of_two(rounded) or rounded >= draw_size:
        raise InvalidSeedRateError(
            f"Seed rate must be the inverse of a power of two lower than the draw size, got {seed_rate}"
        )

    return Fraction(1, rounded)


class DrawGenerator:

    def __init__(self, draw_size: int, seed_rate=0):
        if (
            not isinstance(draw_size, int)
            or draw_size < MIN_DRAW_SIZE
            or draw_size > MAX_DRAW_SIZE
            or not is_power_of_two(draw_size)
        ):
            raise InvalidDrawSizeError(
                f"Draw size must be a power of two between {MIN_DRAW_SIZE} and {MAX_DRAW_SIZE}, got {draw_size}"
            )

        self.draw_size = draw_size
        self.seed_rate = _validate_seed_rate(seed_rate, draw_size)

    # =========================================================
    # SEEDING
    # =========================================================

    def seed_groups(self) -> List[List[int]]:
        """
        Ranking indexes of seeded players, grouped by tier, best tier first.

        Tiers are found by halving the draw size while it still holds
        more than one seed; the smallest tier seats exactly two players.
        """
        seats_by_tier = []
        tier_size = self.draw_size
        while tier_size >= 2 and self.seed_rate * tier_size > 1:
            count = int(self.seed_rate * tier_size)
            seats_by_tier.append(2 if count == 2 else count // 2)
            tier_size //= 2

        groups = []
        next_index = 0
        for seats in reversed(seats_by_tier):
            groups.append(list(range(next_index, next_index + seats)))
            next_index += seats

        logger.debug("Seed tiers for draw of %d: %s", self.draw_size, [len(g) for g in groups])
        return groups

    @property
    def seed_count(self) -> int:
        return sum(len(g) for g in self.seed_groups())

    # =========================================================
    # GENERATION
    # =========================================================

    def generate_draw(self, rng: np.random.Generator, player_count: Optional[int] = None) -> List[Pairing]:
        """
        Builds draw_size / 2 pairings of ranking indexes.

        With fewer players than slots, the missing slots are byes: the
        second element of the pairing is None. Seeds receive byes first.
        """
        count = self.draw_size if player_count is None else min(player_count, self.draw_size)
        if count * 2 < self.draw_size:
            raise PlayerPoolError(
                f"A draw of {self.draw_size} needs at least {self.draw_size // 2} players, got {count}"
            )

        groups = self.seed_groups()
        seeded = {index for group in groups for index in group}
        pool = [i for i in range(count) if i not in seeded]
        byes = self.draw_size - count

        matches_by_group = []
        for rank, group in enumerate(groups):
            matches = []
            for seed in group:
                if byes:
                    byes -= 1
                    matches.append((seed, None))
                else:
                    matches.append((seed, pool.pop(int(rng.integers(len(pool))))))
            if rank > 0:
                matches = [matches[i] for i in rng.permutation(len(matches))]
            matches_by_group.append(matches)

        unseeded_matches = self._pair_unseeded(pool, byes, rng)

        if not matches_by_group:
            return unseeded_matches

        ordered = self._interleave(matches_by_group, unseeded_matches)

        half = len(ordered) // 2
        return ordered[:half] + ordered[half:][::-1]

    @staticmethod
    def _pair_unseeded(pool: List[int], byes: int, rng: np.random.Generator) -> List[Pairing]:
        shuffled = [pool[i] for i in rng.permutation(len(pool))]

        if (len(shuffled) - byes) % 2 or byes > len(shuffled):
            raise InvariantViolationError(
                f"Cannot pair {len(shuffled)} unseeded players with {byes} byes"
            )

        matches: List[Pairing] = [(p, None) for p in shuffled[:byes]]
        rest = shuffled[byes:]
        matches.extend((rest[i], rest[i + 1]) for i in range(0, len(rest), 2))

        return [matches[i] for i in rng.permutation(len(matches))]

    @staticmethod
    def _interleave(matches_by_group: List[List[Pairing]], unseeded_matches: List[Pairing]) -> List[Pairing]:
        """
        Emits one seeded match then a fixed run of unseeded ones.

        The seeded match at position i comes from the best tier whose
        jump size (a power of two) divides i; position 0 takes the top tier.
        """
        stacks = [list(m) for m in matches_by_group]
        jump_sizes = [(2 ** i, i) for i in range(len(stacks) - 1, 0, -1)]

        seeded_count = sum(len(s) for s in stacks)
        if len(unseeded_matches) % seeded_count:
            raise InvariantViolationError(
                f"{len(unseeded_matches)} unseeded matches cannot be spread over {seeded_count} seeds"
            )
        run = len(unseeded_matches) // seeded_count

        ordered = []
        for i in range(seeded_count):
            stack_index = 0
            for jump, index in jump_sizes:
                if i % jump == 0:
                    stack_index = index
                    break

            ordered.append(stacks[len(stacks) - 1 - stack_index].pop(0))
            ordered.extend(unseeded_matches[i * run:(i + 1) * run])

        return ordered
