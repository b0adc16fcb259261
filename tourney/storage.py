import json
from datetime import date
from pathlib import Path
from typing import List, Optional

from tourney.competition import Competition
from tourney.models import ArchivedSet, Level, MatchArchive, Round, ServeRecord, Surface
from tourney.player import Player


def _read(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _parse_serve(value) -> Optional[ServeRecord]:
    if not value:
        return None
    played, held = value
    return ServeRecord(games_played=int(played), games_held=int(held))


def archive_from_dict(data: dict) -> MatchArchive:
    return MatchArchive(
        surface=Surface[data["surface"]],
        level=Level[data["level"]],
        round=Round[data["round"]],
        best_of=int(data["best_of"]),
        date=_parse_date(data["date"]),
        winner_id=int(data["winner_id"]),
        loser_id=int(data["loser_id"]),
        sets=[ArchivedSet(*s) for s in data.get("sets", [])],
        winner_serve=_parse_serve(data.get("winner_serve")),
        loser_serve=_parse_serve(data.get("loser_serve")),
    )


def load_players(path: Path, count: Optional[int] = None, born_after: Optional[date] = None) -> List[Player]:
    """
    Players in file order, which is ranking order.
    """
    players = []
    for p in _read(path)["players"]:
        birth_date = _parse_date(p.get("birth_date"))
        if born_after is not None and (birth_date is None or birth_date < born_after):
            continue
        players.append(
            Player(
                id=int(p["id"]),
                name=Player.full_name(p.get("first_name"), p.get("last_name")),
                date_of_birth=birth_date,
            )
        )
    return players if count is None else players[:count]


def load_matches(
    path: Path,
    player: Player,
    date_min: Optional[date] = None,
    date_max: Optional[date] = None,
) -> List[MatchArchive]:
    matches = []
    for m in _read(path).get("matches", []):
        if player.id not in (m["winner_id"], m["loser_id"]):
            continue
        archive = archive_from_dict(m)
        if date_min is not None and archive.date < date_min:
            continue
        if date_max is not None and archive.date > date_max:
            continue
        matches.append(archive)

    player.set_match_history(matches)
    return matches


def save_competition(path: Path, competition: Competition):
    rounds = {}
    for round, matches in competition.draw.items():
        rounds[round.name] = [
            {
                "players": [p.name if p is not None else None for p in m.players],
                "score": str(m.scoreboard) if m.scoreboard is not None else None,
                "winner": m.winner.name if m.winner is not None else None,
            }
            for m in matches
        ]

    with open(path, "w", encoding="utf-8") as f:
        json.dump({
            "date": competition.date.isoformat(),
            "surface": competition.surface.name,
            "level": competition.level.name,
            "draw_size": competition.draw_size,
            "rounds": rounds,
            "winner": competition.winner.name if competition.winner is not None else None,
        }, f, indent=4)
