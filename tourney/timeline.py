from typing import Iterable, List

from tourney.exceptions import PreconditionError
from tourney.models import FifthSetTieBreakRule, MatchSnapshot
from tourney.scoreboard import Scoreboard

OUTCOMES = ("server", "receiver")


def snapshot(board: Scoreboard, point_index: int) -> MatchSnapshot:
    return MatchSnapshot(
        point_index=point_index,
        sets_won=board.sets_won,
        games=board.current_set.games,
        score=str(board),
        server_index=board.server_index,
        leader_index=board.index_lead,
        is_finished=board.is_finished,
    )


def build_match_timeline(
    best_of: int,
    fifth_set_rule: FifthSetTieBreakRule,
    outcomes: Iterable[str],
    receiver_serves_first: bool = False,
) -> List[MatchSnapshot]:
    """
    Replays a match from scratch using a sequence of point outcomes.
    Returns one snapshot per point, stopping once the match is over.
    Does NOT mutate external state.
    """

    board = Scoreboard(
        best_of=best_of,
        fifth_set_rule=fifth_set_rule,
        receiver_serves_first=receiver_serves_first,
    )

    timeline: List[MatchSnapshot] = []

    for index, outcome in enumerate(outcomes):

        if outcome not in OUTCOMES:
            raise PreconditionError(f"Invalid point outcome: {outcome!r}")

        if outcome == "server":
            board.add_server_point()
        else:
            board.add_receiver_point()

        timeline.append(snapshot(board, index + 1))

        if board.is_finished:
            break

    return timeline
