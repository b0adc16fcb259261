import pytest

from tourney.exceptions import (
    InvalidPlayerIndexError,
    MatchFinishedError,
    NotInTieBreakError,
    PreconditionError,
    TieBreakInProgressError,
    WrongScoringModeError,
)
from tourney.models import FifthSetTieBreakRule
from tourney.scoreboard import Scoreboard


def point_for(board, side):
    if board.server_index == side:
        board.add_server_point()
    else:
        board.add_receiver_point()


def game_for(board, side):
    if board.server_index == side:
        board.add_server_game()
    else:
        board.add_receiver_game()


def win_game(board, side):
    for _ in range(4):
        point_for(board, side)


def win_set(board, side):
    for _ in range(6):
        win_game(board, side)


def reach_six_all(board):
    for _ in range(6):
        win_game(board, 0)
        win_game(board, 1)


# =========================================================
# MATCH RESULTS
# =========================================================

def test_side_zero_wins_every_point():
    board = Scoreboard(best_of=3)

    while not board.is_finished:
        point_for(board, 0)

    assert str(board) == "6/0 6/0"
    assert board.is_finished is True
    assert board.index_lead == 0
    assert board.winner_index == 0


@pytest.mark.parametrize("best_of, sequence, sets_won", [
    (3, [0, 0], (2, 0)),
    (3, [1, 0, 1], (1, 2)),
    (5, [0, 0, 0], (3, 0)),
    (5, [1, 0, 1, 0, 1], (2, 3)),
    (5, [0, 1, 1, 0, 0], (3, 2)),
])
def test_match_ends_at_majority(best_of, sequence, sets_won):
    board = Scoreboard(best_of=best_of)

    for side in sequence:
        assert board.is_finished is False
        win_set(board, side)

    assert board.is_finished is True
    assert board.sets_won == sets_won
    assert len(board.sets) == len(sequence)
    assert board.winner_index == sequence[-1]


def test_sets_to_win():
    assert Scoreboard(best_of=3).sets_to_win == 2
    assert Scoreboard(best_of=5).sets_to_win == 3


@pytest.mark.parametrize("best_of", [0, 1, 2, 4, 7])
def test_invalid_best_of(best_of):
    with pytest.raises(PreconditionError):
        Scoreboard(best_of=best_of)


# =========================================================
# SERVER ROTATION
# =========================================================

def test_first_server():
    assert Scoreboard().server_index == 0
    assert Scoreboard(receiver_serves_first=True).server_index == 1


def test_server_alternates_each_game():
    board = Scoreboard()
    servers = []

    for _ in range(4):
        servers.append(board.server_index)
        board.add_server_point()
        board.add_server_point()
        board.add_server_point()
        board.add_server_point()

    assert servers == [0, 1, 0, 1]


def test_server_after_tie_break_set():
    board = Scoreboard()
    reach_six_all(board)

    tie_break_first_server = board.server_index
    assert board.is_currently_tie_break is True

    for _ in range(7):
        point_for(board, 0)

    assert len(board.sets) == 2
    assert board.server_index == 1 - tie_break_first_server


# =========================================================
# LEAD & RENDERING
# =========================================================

def test_level_at_start():
    board = Scoreboard()

    assert board.index_lead == -1
    assert str(board) == "0/0 | 0 - 0"


def test_lead_inside_game():
    board = Scoreboard()
    point_for(board, 1)

    assert board.index_lead == 1
    assert str(board) == "0/0 | 0 - 15"


def test_lead_with_advantage():
    board = Scoreboard()
    for _ in range(3):
        point_for(board, 0)
        point_for(board, 1)
    point_for(board, 1)

    assert board.index_lead == 1
    assert str(board) == "0/0 | 40 - 40 (A)"


def test_sets_decide_lead_before_games():
    board = Scoreboard()
    win_set(board, 0)
    win_game(board, 1)
    win_game(board, 1)

    assert board.index_lead == 0
    assert str(board) == "6/0 0/2 | 0 - 0"


def give_advantage(board, side):
    for _ in range(3):
        point_for(board, 0)
        point_for(board, 1)
    point_for(board, side)


def test_set_lead_beats_opponent_advantage():
    board = Scoreboard()
    win_set(board, 0)
    give_advantage(board, 1)

    assert board.sets_won == (1, 0)
    assert board.index_lead == 0
    assert str(board) == "6/0 0/0 | 40 - 40 (A)"


def test_game_lead_beats_opponent_advantage():
    board = Scoreboard()
    for _ in range(3):
        win_game(board, 0)
    give_advantage(board, 1)

    assert board.index_lead == 0
    assert str(board) == "3/0 | 40 - 40 (A)"


def test_advantage_decides_when_games_level():
    board = Scoreboard()
    win_game(board, 0)
    win_game(board, 1)
    give_advantage(board, 0)

    assert board.index_lead == 0
    assert str(board) == "1/1 | 40 (A) - 40"


def test_tie_break_rendering_and_lead():
    board = Scoreboard()
    reach_six_all(board)
    point_for(board, 1)
    point_for(board, 1)
    point_for(board, 0)

    assert board.index_lead == 1
    assert str(board) == "6/6 | [1]-[2]"


def test_finished_tie_break_rendering():
    board = Scoreboard()
    reach_six_all(board)
    for _ in range(5):
        point_for(board, 0)
        point_for(board, 1)
    point_for(board, 1)
    point_for(board, 1)

    assert str(board) == "6/7[5] 0/0 | 0 - 0"


# =========================================================
# LOCK AFTER FINISH
# =========================================================

def test_point_after_finish_rejected():
    board = Scoreboard()
    win_set(board, 1)
    win_set(board, 1)

    with pytest.raises(MatchFinishedError):
        board.add_server_point()

    with pytest.raises(MatchFinishedError):
        board.add_receiver_point()

    assert str(board) == "0/6 0/6"


def test_game_after_finish_rejected():
    board = Scoreboard(point_by_point=False)
    for _ in range(12):
        game_for(board, 0)

    assert board.is_finished is True

    with pytest.raises(MatchFinishedError):
        board.add_server_game()


# =========================================================
# GAME-BY-GAME MODE
# =========================================================

def test_wrong_mode_rejected():
    by_point = Scoreboard()
    by_game = Scoreboard(point_by_point=False)

    with pytest.raises(WrongScoringModeError):
        by_point.add_server_game()

    with pytest.raises(WrongScoringModeError):
        by_point.add_tie_break(0)

    with pytest.raises(WrongScoringModeError):
        by_game.add_server_point()


def test_games_advance_the_set():
    board = Scoreboard(point_by_point=False)

    board.add_server_game()
    board.add_server_game()

    assert board.current_set.games == (1, 1)
    assert board.server_index == 0


def test_tie_break_must_be_resolved_with_add_tie_break():
    board = Scoreboard(point_by_point=False)

    with pytest.raises(NotInTieBreakError):
        board.add_tie_break(0)

    for _ in range(6):
        game_for(board, 0)
        game_for(board, 1)

    assert board.is_currently_tie_break is True

    with pytest.raises(TieBreakInProgressError):
        board.add_server_game()

    board.add_tie_break(1)

    assert str(board.sets[0]) == "6/7[0]"
    assert board.sets_won == (0, 1)
    assert board.is_currently_tie_break is False


def test_add_tie_break_rejects_invalid_side():
    board = Scoreboard(point_by_point=False)
    for _ in range(6):
        game_for(board, 0)
        game_for(board, 1)

    with pytest.raises(InvalidPlayerIndexError):
        board.add_tie_break(2)


# =========================================================
# FIFTH SET RULES
# =========================================================

def play_to_fifth_set(board):
    for side in (0, 1, 0, 1):
        for _ in range(6):
            game_for(board, side)


@pytest.mark.parametrize("rule, tie_break_at", [
    (FifthSetTieBreakRule.AT_6_6, 6),
    (FifthSetTieBreakRule.AT_12_12, 12),
])
def test_fifth_set_tie_break(rule, tie_break_at):
    board = Scoreboard(best_of=5, fifth_set_rule=rule, point_by_point=False)
    play_to_fifth_set(board)

    assert len(board.sets) == 5

    for _ in range(tie_break_at):
        assert board.is_currently_tie_break is False
        game_for(board, 0)
        game_for(board, 1)

    assert board.is_currently_tie_break is True

    board.add_tie_break(0)

    assert board.is_finished is True
    assert str(board).endswith(f"{tie_break_at + 1}/{tie_break_at}[0]")


def test_fifth_set_advantage_set():
    board = Scoreboard(best_of=5, fifth_set_rule=FifthSetTieBreakRule.NONE, point_by_point=False)
    play_to_fifth_set(board)

    for _ in range(20):
        game_for(board, 0)
        game_for(board, 1)

    assert board.is_currently_tie_break is False
    assert board.is_finished is False

    game_for(board, 1)
    game_for(board, 1)

    assert board.is_finished is True
    assert str(board) == "6/0 0/6 6/0 0/6 20/22"


def test_first_four_sets_keep_tie_break_in_best_of_five():
    board = Scoreboard(best_of=5, fifth_set_rule=FifthSetTieBreakRule.NONE, point_by_point=False)

    for _ in range(6):
        game_for(board, 0)
        game_for(board, 1)

    assert board.is_currently_tie_break is True
