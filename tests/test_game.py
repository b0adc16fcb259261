import pytest

from tourney.exceptions import InvalidPlayerIndexError, MatchFinishedError
from tourney.game import Game


def play(game, sides):
    ended = False
    for side in sides:
        ended = game.add_point(side)
    return ended


def reach_deuce():
    game = Game()
    play(game, [0, 1, 0, 1, 0, 1])
    return game


# ---------- POINT PROGRESSION ----------

@pytest.mark.parametrize("sides, expected", [
    ([], (0, 0)),
    ([0], (15, 0)),
    ([0, 0], (30, 0)),
    ([0, 0, 0], (40, 0)),
    ([1, 0, 1], (15, 30)),
    ([1, 1, 1, 0], (15, 40)),
])
def test_point_levels(sides, expected):
    game = Game()
    play(game, sides)

    assert game.points == expected
    assert game.is_finished is False


def test_four_straight_points_win():
    game = Game()

    assert play(game, [1, 1, 1, 1]) is True
    assert game.winner == 1
    assert game.is_finished is True


# ---------- DEUCE & ADVANTAGE ----------

def test_deuce_detection():
    game = reach_deuce()

    assert game.is_deuce is True
    assert game.advantage is None
    assert str(game) == "40 - 40"


def test_advantage_then_win():
    game = reach_deuce()

    assert game.add_point(0) is False
    assert game.advantage == 0
    assert game.is_deuce is False
    assert str(game) == "40 (A) - 40"

    assert game.add_point(0) is True
    assert game.winner == 0
    assert game.advantage is None


def test_advantage_lost_returns_to_deuce():
    game = reach_deuce()

    game.add_point(1)
    assert str(game) == "40 - 40 (A)"

    game.add_point(0)
    assert game.is_deuce is True
    assert game.is_finished is False


def test_long_deuce_battle():
    game = reach_deuce()

    for _ in range(10):
        game.add_point(0)
        game.add_point(1)

    assert game.is_deuce is True
    assert play(game, [1, 1]) is True
    assert game.winner == 1


# ---------- ERRORS ----------

def test_point_after_finish_rejected():
    game = Game()
    play(game, [0, 0, 0, 0])

    with pytest.raises(MatchFinishedError):
        game.add_point(1)


@pytest.mark.parametrize("side", [2, -1, True, "a", None])
def test_invalid_side(side):
    game = Game()

    with pytest.raises(InvalidPlayerIndexError):
        game.add_point(side)

    assert game.points == (0, 0)
