class TourneyError(Exception):
    pass


# ---------------------------------------------------------
# Precondition violations (caller errors)
# ---------------------------------------------------------

class PreconditionError(TourneyError, ValueError):
    pass


class InvalidPlayerIndexError(PreconditionError):

    def __init__(self, side):
        super().__init__(f"Player index must be 0 or 1, got {side!r}")
        self.side = side


class InvalidDrawSizeError(PreconditionError):
    pass


class InvalidSeedRateError(PreconditionError):
    pass


class DuplicatePlayerError(PreconditionError):
    pass


class PlayerPoolError(PreconditionError):
    pass


class InvalidArchiveError(PreconditionError):
    pass


# ---------------------------------------------------------
# State violations (programmer errors, never retried)
# ---------------------------------------------------------

class InvalidStateError(TourneyError, RuntimeError):
    pass


class MatchFinishedError(InvalidStateError):

    def __init__(self, what="match"):
        super().__init__(f"The {what} is already finished")


class WrongScoringModeError(InvalidStateError):
    pass


class NotInTieBreakError(InvalidStateError):
    pass


class TieBreakInProgressError(InvalidStateError):
    pass


# ---------------------------------------------------------
# Fatal invariant violations (bugs in draw or competition code)
# ---------------------------------------------------------

class InvariantViolationError(TourneyError, AssertionError):
    pass


def check_side(side) -> int:
    # bool is an int subclass; True/False are not valid sides
    if isinstance(side, bool) or side not in (0, 1):
        raise InvalidPlayerIndexError(side)
    return side
