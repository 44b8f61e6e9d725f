from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from models.round import Round
from models.round_player import Participation
from models.snapshot import HOLES, TourSnapshot
from scoring.stableford import net_stableford_points


def playing_handicap_for(snapshot: TourSnapshot, round_id: str, player_id: str) -> int:
    """Stored playing handicap for the round, else the player's starting handicap."""
    stored = snapshot.stored_handicap(round_id, player_id)
    if stored is not None:
        return stored
    player = snapshot.get_player(player_id)
    return player.starting_handicap_int() if player else 0


def hole_points(
    snapshot: TourSnapshot,
    round_: Round,
    player_id: str,
    playing_handicap: Optional[int] = None,
) -> Optional[List[Optional[int]]]:
    """Net points for holes 1-18, ``None`` for holes with nothing entered.

    Returns ``None`` outright when the round has no usable par table for
    this player.
    """
    table = snapshot.par_table(round_, player_id)
    if table is None or not table.is_complete():
        return None
    if playing_handicap is None:
        playing_handicap = playing_handicap_for(snapshot, round_.id, player_id)

    pars = table.by_number()
    points: List[Optional[int]] = []
    for number in HOLES:
        score = snapshot.hole_score(round_.id, player_id, number)
        if score.is_empty:
            points.append(None)
            continue
        hole = pars[number]
        points.append(net_stableford_points(score, hole.par, hole.stroke_index, playing_handicap))
    return points


def round_total(
    snapshot: TourSnapshot,
    round_: Round,
    player_id: str,
    playing_handicap: Optional[int] = None,
) -> Optional[int]:
    """Stableford total for one player's round.

    Empty holes add nothing. Missing par data gives ``None`` rather than 0 so
    that unusable rounds never leak into averages.
    """
    points = hole_points(snapshot, round_, player_id, playing_handicap)
    if points is None:
        return None
    return sum(p for p in points if p is not None)


def is_card_complete(snapshot: TourSnapshot, round_id: str, player_id: str) -> bool:
    return snapshot.participation(round_id, player_id) == Participation.PLAYING_COMPLETE


def is_round_complete(snapshot: TourSnapshot, round_id: str) -> bool:
    """At least one player is playing and every playing player has 18 holes entered."""
    playing = snapshot.playing_players(round_id)
    if not playing:
        return False
    return all(is_card_complete(snapshot, round_id, p.player_id) for p in playing)


def sum_best_n(values: Iterable[Optional[int]], n: int) -> int:
    """Sum of the ``n`` largest non-null values."""
    k = max(0, int(n))
    if k == 0:
        return 0
    present = sorted((v for v in values if v is not None), reverse=True)
    return sum(present[:k])


def best_n_total(
    per_round: Sequence[Optional[int]],
    n: int,
    must_include_final: bool = False,
) -> int:
    """Best-N total over per-round values given in tour order.

    With ``must_include_final`` a played final round is always counted and the
    best N-1 of the others are added. If the final was not played the best N
    of the other rounds are used instead.
    """
    n = max(1, int(n))
    if not per_round:
        return 0
    if not must_include_final:
        return sum_best_n(per_round, n)

    final = per_round[-1]
    others = per_round[:-1]
    if final is None:
        return sum_best_n(others, n)
    return final + sum_best_n(others, n - 1)
