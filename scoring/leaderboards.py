"""Tour leaderboards built from round totals.

Every builder returns rows sorted by total (desc) then label, with per-round
values keyed by round id. A ``None`` per-round value is a gap (did not play,
or no usable par data), never a zero.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from models.group import Group
from models.round import Round
from models.snapshot import HOLES, TourSnapshot
from scoring.matchplay import round_matches
from scoring.totals import (
    best_n_total,
    hole_points,
    is_card_complete,
    is_round_complete,
    round_total,
)


class GroupRule(str, Enum):
    SUM = "sum"
    BEST_BALL = "best_ball"
    BEST_M_MINUS_ZEROS = "best_m_minus_zeros"


class RoundHeader(BaseModel):
    id: str
    label: str


class LeaderboardRow(BaseModel):
    entry_id: str
    label: str
    per_round: Dict[str, Optional[int]] = Field(default_factory=dict)
    total: float = 0
    members: List[str] = Field(default_factory=list)
    stats: Dict[str, float] = Field(default_factory=dict)


class Leaderboard(BaseModel):
    tour_name: str
    rounds: List[RoundHeader] = Field(default_factory=list)
    rows: List[LeaderboardRow] = Field(default_factory=list)


def _sort_rows(rows: List[LeaderboardRow]) -> List[LeaderboardRow]:
    return sorted(rows, key=lambda r: (-r.total, r.label.lower()))


def _eligible_rounds(snapshot: TourSnapshot, exclude_incomplete: bool) -> List[Round]:
    if not exclude_incomplete:
        return list(snapshot.rounds)
    return [r for r in snapshot.rounds if is_round_complete(snapshot, r.id)]


def _headers(rounds: Sequence[Round]) -> List[RoundHeader]:
    return [RoundHeader(id=r.id, label=f"R{i}") for i, r in enumerate(rounds, start=1)]


def _combine(per_round: Sequence[Optional[int]], best_n: Optional[int], must_include_final: bool) -> int:
    if best_n:
        return best_n_total(per_round, best_n, must_include_final)
    return sum(v for v in per_round if v is not None)


# ================================================================
# Individual
# ================================================================

def player_round_total(snapshot: TourSnapshot, round_: Round, player_id: str) -> Optional[int]:
    """Total for a playing player; ``None`` when not playing or unscorable."""
    if not snapshot.is_playing(round_.id, player_id):
        return None
    return round_total(snapshot, round_, player_id)


def tour_leaderboard(
    snapshot: TourSnapshot,
    *,
    best_n: Optional[int] = None,
    must_include_final: bool = False,
    exclude_incomplete: bool = False,
) -> Leaderboard:
    rounds = _eligible_rounds(snapshot, exclude_incomplete)
    rows = []
    for player in snapshot.players:
        values = [player_round_total(snapshot, r, player.player_id) for r in rounds]
        rows.append(LeaderboardRow(
            entry_id=player.player_id,
            label=player.name,
            per_round={r.id: v for r, v in zip(rounds, values)},
            total=_combine(values, best_n, must_include_final),
            members=[player.player_id],
        ))
    return Leaderboard(tour_name=snapshot.tour.name, rounds=_headers(rounds), rows=_sort_rows(rows))


# ================================================================
# Pairs and teams
# ================================================================

def combine_hole(points: Sequence[int], rule: GroupRule, best_m: int = 1) -> int:
    """Group score for one hole from the members' net points."""
    if not points:
        return 0
    if rule == GroupRule.BEST_BALL:
        return max(points)
    if rule == GroupRule.BEST_M_MINUS_ZEROS:
        m = max(1, int(best_m))
        top = sorted(points, reverse=True)[:m]
        zeros = sum(1 for p in points if p == 0)
        return sum(top) - zeros
    return sum(points)


def group_round_total(
    snapshot: TourSnapshot,
    round_: Round,
    group: Group,
    rule: GroupRule,
    best_m: int = 1,
) -> Optional[int]:
    """Group total for a round; ``None`` when no member played.

    Each member is scored with their own playing handicap. Members who did
    not play the round, and holes a member has not entered, are left out of
    the per-hole comparison.
    """
    cards = []
    for player_id in group.player_ids:
        if not snapshot.is_playing(round_.id, player_id):
            continue
        points = hole_points(snapshot, round_, player_id)
        if points is None:
            points = [None] * 18
        cards.append(points)
    if not cards:
        return None

    total = 0
    for index in range(len(HOLES)):
        per_member = [card[index] for card in cards if card[index] is not None]
        total += combine_hole(per_member, rule, best_m)
    return total


def group_leaderboard(
    snapshot: TourSnapshot,
    groups: Sequence[Group],
    rule: GroupRule,
    *,
    best_m: Optional[int] = None,
    best_n: Optional[int] = None,
    must_include_final: bool = False,
    exclude_incomplete: bool = False,
) -> Leaderboard:
    m = best_m if best_m is not None else snapshot.tour.default_team_best_m
    rounds = _eligible_rounds(snapshot, exclude_incomplete)
    rows = []
    for group in groups:
        values = [group_round_total(snapshot, r, group, rule, m) for r in rounds]
        member_names = [
            (snapshot.get_player(pid).name if snapshot.get_player(pid) else pid)
            for pid in group.player_ids
        ]
        rows.append(LeaderboardRow(
            entry_id=group.id,
            label=group.label,
            per_round={r.id: v for r, v in zip(rounds, values)},
            total=_combine(values, best_n, must_include_final),
            members=member_names,
        ))
    return Leaderboard(tour_name=snapshot.tour.name, rounds=_headers(rounds), rows=_sort_rows(rows))


# ================================================================
# Eclectic
# ================================================================

def eclectic_leaderboard(snapshot: TourSnapshot) -> Leaderboard:
    """Best net points on each hole across every round the player completed."""
    rows = []
    for player in snapshot.players:
        best: List[Optional[int]] = [None] * 18
        holes_played = 0
        for round_ in snapshot.rounds:
            if not is_card_complete(snapshot, round_.id, player.player_id):
                continue
            points = hole_points(snapshot, round_, player.player_id)
            if points is None:
                continue
            holes_played += 18
            for index, value in enumerate(points):
                value = value or 0
                if best[index] is None or value > best[index]:
                    best[index] = value
        total = sum(v for v in best if v is not None)
        rows.append(LeaderboardRow(
            entry_id=player.player_id,
            label=player.name,
            total=total,
            members=[player.player_id],
            stats={"holes_played": holes_played, "eclectic_total": total},
        ))
    return Leaderboard(tour_name=snapshot.tour.name, rows=_sort_rows(rows))


# ================================================================
# Round competition winners
# ================================================================

def competition_winners(snapshot: TourSnapshot, round_id: str) -> List[LeaderboardRow]:
    """Players at or above the score of the player ranked half-way down the tour.

    The cut-off rank is ``floor(tour players / 2)``; everyone tied with the
    cut-off score is included, so there may be more winners than that.
    """
    round_ = snapshot.get_round(round_id)
    if round_ is None:
        return []

    ranked = []
    for player in snapshot.players:
        total = player_round_total(snapshot, round_, player.player_id)
        if total is None:
            continue
        ranked.append(LeaderboardRow(
            entry_id=player.player_id,
            label=player.name,
            per_round={round_.id: total},
            total=total,
            members=[player.player_id],
        ))
    ranked = _sort_rows(ranked)
    if not ranked:
        return []

    position = max(1, len(snapshot.players) // 2)
    if position > len(ranked):
        return ranked
    cutoff = ranked[position - 1].total
    return [row for row in ranked if row.total >= cutoff]


# ================================================================
# Matchplay points
# ================================================================

def match_points_table(snapshot: TourSnapshot) -> List[LeaderboardRow]:
    """Match points per side label, summed over every finished match."""
    totals: Dict[str, float] = {}
    played: Dict[str, int] = {}
    for round_ in snapshot.rounds:
        for result in round_matches(snapshot, round_.id):
            if not result.is_final:
                continue
            for label, points in ((result.side_a, result.points_a), (result.side_b, result.points_b)):
                totals[label] = totals.get(label, 0.0) + (points or 0.0)
                played[label] = played.get(label, 0) + 1
    rows = [
        LeaderboardRow(entry_id=label, label=label, total=total, stats={"matches": played[label]})
        for label, total in totals.items()
    ]
    return _sort_rows(rows)
