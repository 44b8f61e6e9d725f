"""Conversion between asyncpg database rows and Pydantic domain models.

This is the only place that knows the shape of store rows. Join columns
that may come back either as one object or as a one-element list are
normalized here so nothing downstream has to care.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from models import (
    CourseTee,
    Group,
    GroupKind,
    Hole,
    HoleScore,
    Match,
    MatchFormat,
    Round,
    RoundPlayer,
    ScoreEntry,
    Side,
    Tee,
    Tour,
    TourPlayer,
    TourSnapshot,
)


def _id(value) -> Optional[str]:
    return str(value) if value is not None else None


def _get(row, key: str, default=None):
    """Column lookup that tolerates absent columns on both Records and dicts."""
    try:
        value = row[key]
    except (KeyError, IndexError):
        return default
    return default if value is None else value


def _first(value) -> Optional[Any]:
    """A related row that may be embedded as an object or a list of objects."""
    if not value:
        return None
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _float_or_none(value) -> Optional[float]:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


# ================================================================
# Row -> Model (reads)
# ================================================================

def tour_from_row(row) -> Tour:
    """tours row -> Tour model."""
    return Tour(
        id=str(row["id"]),
        name=(_get(row, "name") or "").strip() or "Tour",
        rehandicapping_enabled=_get(row, "rehandicapping_enabled") is True,
        default_team_best_m=max(1, int(_get(row, "default_team_best_m", 2))),
        description=_get(row, "description"),
    )


def round_from_row(row) -> Round:
    """rounds row -> Round model."""
    return Round(
        id=str(row["id"]),
        tour_id=_id(_get(row, "tour_id")),
        course_id=_id(_get(row, "course_id")),
        round_no=_get(row, "round_no"),
        played_on=_get(row, "played_on"),
        created_at=_get(row, "created_at"),
        name=_get(row, "name"),
    )


def tour_player_from_row(row) -> Optional[TourPlayer]:
    """tour_players row joined to players -> TourPlayer.

    Accepts the flat join the repository issues, or a ``players`` relation
    embedded as an object or a list. Rows without a player id are dropped.
    """
    joined = _first(_get(row, "players"))
    source = joined if joined is not None else row

    player_id = _get(source, "id") if joined is not None else _get(row, "player_id")
    if player_id is None:
        return None

    gender = _get(source, "gender")
    return TourPlayer(
        player_id=str(player_id),
        name=(_get(source, "name") or "").strip() or "(missing player)",
        starting_handicap=_float_or_none(_get(row, "starting_handicap")),
        global_handicap=_float_or_none(_get(source, "start_handicap")),
        gender=Tee.normalize(gender) if gender is not None else None,
    )


def round_player_from_row(row) -> RoundPlayer:
    """round_players row -> RoundPlayer."""
    handicap = _get(row, "playing_handicap")
    tee = _get(row, "tee")
    return RoundPlayer(
        round_id=str(row["round_id"]),
        player_id=str(row["player_id"]),
        playing=_get(row, "playing") is True,
        playing_handicap=max(0, int(handicap)) if handicap is not None else None,
        tee=Tee.normalize(tee) if tee is not None else None,
    )


def course_tees_from_rows(rows: Iterable) -> List[CourseTee]:
    """pars rows -> one CourseTee per (course_id, tee)."""
    grouped: Dict[Tuple[str, Tee], List[Hole]] = defaultdict(list)
    for row in rows:
        key = (str(row["course_id"]), Tee.normalize(_get(row, "tee")))
        grouped[key].append(Hole(
            number=row["hole_number"],
            par=row["par"],
            stroke_index=row["stroke_index"],
        ))
    return [
        CourseTee(course_id=course_id, tee=tee, holes=holes)
        for (course_id, tee), holes in grouped.items()
    ]


def score_from_row(row) -> ScoreEntry:
    """scores row -> ScoreEntry. A pickup flag wins over any stroke value."""
    hole_number = row["hole_number"]
    if _get(row, "pickup") is True:
        score = HoleScore(hole_number=hole_number, pickup=True)
    else:
        score = HoleScore.from_raw(hole_number, _get(row, "strokes"))
    return ScoreEntry(
        round_id=str(row["round_id"]),
        player_id=str(row["player_id"]),
        score=score,
    )


def groups_from_rows(group_rows: Iterable, member_rows: Iterable) -> List[Group]:
    """tour_groups + tour_group_members rows -> Group models (members in position order)."""
    members: Dict[str, List[Tuple[int, str]]] = defaultdict(list)
    for row in member_rows:
        members[str(row["group_id"])].append((_get(row, "position", 0), str(row["player_id"])))
    groups = []
    for row in group_rows:
        gid = str(row["id"])
        ordered = [pid for _, pid in sorted(members.get(gid, []))]
        groups.append(Group(
            id=gid,
            name=_get(row, "name"),
            kind=GroupKind(_get(row, "kind", "pair")),
            player_ids=ordered,
        ))
    return groups


def match_from_row(row) -> Match:
    """matches row -> Match."""
    return Match(
        id=_id(_get(row, "id")),
        round_id=_id(_get(row, "round_id")),
        format=MatchFormat(_get(row, "format", MatchFormat.INDIVIDUAL_MATCHPLAY.value)),
        side_a=Side(
            label=_get(row, "side_a_label", "A"),
            player_ids=[str(p) for p in row["side_a_player_ids"]],
        ),
        side_b=Side(
            label=_get(row, "side_b_label", "B"),
            player_ids=[str(p) for p in row["side_b_player_ids"]],
        ),
        double_points=_get(row, "double_points") is True,
    )


def snapshot_from_rows(
    tour_row,
    round_rows: Iterable,
    tour_player_rows: Iterable,
    round_player_rows: Iterable,
    par_rows: Iterable,
    score_rows: Iterable,
    group_rows: Iterable = (),
    member_rows: Iterable = (),
    match_rows: Iterable = (),
) -> TourSnapshot:
    """Assemble the full TourSnapshot from every row set of one tour."""
    players = [p for p in (tour_player_from_row(r) for r in tour_player_rows) if p is not None]
    return TourSnapshot(
        tour=tour_from_row(tour_row),
        rounds=[round_from_row(r) for r in round_rows],
        players=players,
        round_players=[round_player_from_row(r) for r in round_player_rows],
        course_tees=course_tees_from_rows(par_rows),
        scores=[score_from_row(r) for r in score_rows],
        groups=groups_from_rows(group_rows, member_rows),
        matches=[match_from_row(r) for r in match_rows],
    )


# ================================================================
# Model -> Row tuple (writes)
# ================================================================

def round_player_to_row(rp: RoundPlayer) -> tuple:
    """RoundPlayer -> tuple for round_players upsert (for executemany)."""
    return (
        UUID(rp.round_id),
        UUID(rp.player_id),
        rp.playing,
        rp.playing_handicap,
        (rp.tee or Tee.MEN).value,
    )
