from datetime import date

import pytest

from tourney.exceptions import InvalidArchiveError
from tourney.models import (
    ArchivedSet,
    Level,
    MatchArchive,
    Round,
    ServeRecord,
    StatCategory,
    Surface,
)
from tourney.player import Player


def archive(winner_id, loser_id, surface=Surface.HARD, level=Level.ATP_TOUR, round=Round.R16,
            best_of=3, day=date(2019, 1, 10), sets=None, winner_serve=None, loser_serve=None):
    return MatchArchive(
        surface=surface,
        level=level,
        round=round,
        best_of=best_of,
        date=day,
        winner_id=winner_id,
        loser_id=loser_id,
        sets=sets if sets is not None else [ArchivedSet(6, 4), ArchivedSet(6, 3)],
        winner_serve=winner_serve,
        loser_serve=loser_serve,
    )


def make_player_with_history():
    player = Player(1, "Nadal, Rafael")
    player.set_match_history([
        archive(1, 2, surface=Surface.CLAY, sets=[ArchivedSet(7, 6, 4), ArchivedSet(6, 2)],
                winner_serve=ServeRecord(10, 9), loser_serve=ServeRecord(9, 6)),
        archive(3, 1, surface=Surface.HARD, sets=[ArchivedSet(6, 7, 5), ArchivedSet(7, 6, 8)],
                winner_serve=ServeRecord(13, 12), loser_serve=ServeRecord(12, 11)),
        archive(1, 3, surface=Surface.HARD, day=date(2018, 6, 1)),
        archive(2, 3, surface=Surface.GRASS),
    ])
    return player


# ---------- ARCHIVES ----------

def test_archive_rejects_same_players():
    with pytest.raises(InvalidArchiveError):
        archive(1, 1)


def test_archive_rejects_bad_best_of():
    with pytest.raises(InvalidArchiveError):
        archive(1, 2, best_of=4)


def test_archive_rejects_too_many_sets():
    with pytest.raises(InvalidArchiveError):
        archive(1, 2, sets=[ArchivedSet(6, 4)] * 6)


def test_archive_rejects_impossible_serve_record():
    with pytest.raises(InvalidArchiveError):
        archive(1, 2, winner_serve=ServeRecord(5, 6))


def test_archive_tie_breaks_from_both_sides():
    m = archive(3, 1, sets=[ArchivedSet(6, 7, 5), ArchivedSet(7, 6, 8), ArchivedSet(6, 1)])

    assert m.tie_breaks(3) == (2, 1)
    assert m.tie_breaks(1) == (2, 1)
    assert m.opponent_of(3) == 1
    assert m.opponent_of(1) == 3


def test_seven_six_without_points_counts_as_tie_break():
    assert ArchivedSet(7, 6).has_tie_break is True
    assert ArchivedSet(7, 5).has_tie_break is False
    assert ArchivedSet(13, 12, 3).has_tie_break is True


# ---------- HISTORY ----------

def test_history_keeps_only_own_matches():
    player = make_player_with_history()

    assert player.history_loaded is True
    assert len(player.match_history) == 3


def test_win_rates_by_surface():
    player = make_player_with_history()

    by_surface = player.win_rates[StatCategory.SURFACE]

    assert by_surface[Surface.CLAY] == 1.0
    assert by_surface[Surface.HARD] == 0.5
    assert Surface.GRASS not in by_surface


def test_win_rates_by_opponent_and_year():
    player = make_player_with_history()

    assert player.win_rates[StatCategory.OPPONENT] == {2: 1.0, 3: 0.5}
    assert player.win_rates[StatCategory.YEAR] == {2019: 0.5, 2018: 1.0}


def test_hold_rates_skip_missing_serve_data():
    player = make_player_with_history()

    by_surface = player.hold_rates[StatCategory.SURFACE]

    assert by_surface[Surface.CLAY] == pytest.approx(0.9)
    assert by_surface[Surface.HARD] == pytest.approx(11 / 12)

    by_year = player.hold_rates[StatCategory.YEAR]
    assert by_year[2018] is None


def test_tie_break_rates():
    player = make_player_with_history()

    by_surface = player.tie_break_rates[StatCategory.SURFACE]

    assert by_surface[Surface.CLAY] == 1.0
    assert by_surface[Surface.HARD] == 0.5
    assert player.tie_break_rates[StatCategory.YEAR][2018] is None


def test_history_can_be_replaced():
    player = make_player_with_history()

    player.set_match_history([])

    assert player.match_history == ()
    assert player.win_rates[StatCategory.SURFACE] == {}


def test_fresh_player_has_no_statistics():
    player = Player(7, "Someone")

    assert player.history_loaded is False
    assert all(not v for v in player.hold_rates.values())


# ---------- FILTERS ----------

@pytest.mark.parametrize("kwargs, expected", [
    (dict(), 3),
    (dict(surface=Surface.HARD), 2),
    (dict(surface=Surface.GRASS), 0),
    (dict(opponent_id=3), 2),
    (dict(date_min=date(2019, 1, 1)), 2),
    (dict(date_max=date(2018, 12, 31)), 1),
    (dict(level=Level.GRAND_SLAM), 0),
    (dict(round=Round.R16, best_of=3), 3),
])
def test_filter_match_history(kwargs, expected):
    player = make_player_with_history()

    assert len(player.filter_match_history(**kwargs)) == expected


# ---------- NAMES ----------

@pytest.mark.parametrize("first, last, expected", [
    ("Roger", "Federer", "Federer, Roger"),
    (" Roger ", "Federer ", "Federer, Roger"),
    (None, "Federer", "Federer"),
    ("Roger", None, "Roger"),
    (None, None, ""),
])
def test_full_name(first, last, expected):
    assert Player.full_name(first, last) == expected


def test_str_and_repr():
    player = Player(5, "Thiem, Dominic")

    assert str(player) == "Thiem, Dominic"
    assert repr(player) == "Player(id=5, name='Thiem, Dominic')"
