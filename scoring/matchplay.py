"""Hole-by-hole matchplay resolution on net Stableford points."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from models.match import HoleOutcome, HoleWinner, Match, MatchFormat, MatchResult, Side
from models.round import Round
from models.snapshot import TourSnapshot
from scoring.totals import hole_points

HOLE_COUNT = 18


def resolve_hole(a_points: Optional[int], b_points: Optional[int]) -> HoleWinner:
    if a_points is None or b_points is None:
        return HoleWinner.NO_DATA
    if a_points > b_points:
        return HoleWinner.A
    if b_points > a_points:
        return HoleWinner.B
    return HoleWinner.HALVED


def final_text(diff: int, decided_at_hole: Optional[int], side_a: str, side_b: str) -> str:
    if diff == 0:
        return "All Square"
    winner, loser = (side_a, side_b) if diff > 0 else (side_b, side_a)
    margin = abs(diff)
    if decided_at_hole is not None and decided_at_hole < HOLE_COUNT:
        return f"{winner} def {loser} {margin} & {HOLE_COUNT - decided_at_hole}"
    return f"{winner} def {loser} {margin} up"


def live_text(diff: int, thru: int, side_a: str, side_b: str) -> str:
    if thru <= 0:
        return "Not started"
    if diff == 0:
        return f"All Square (after {thru} holes)"
    leader = side_a if diff > 0 else side_b
    return f"{leader} is {abs(diff)} up (after {thru} holes)"


def match_points(diff: int, double_points: bool = False):
    """Points for (A, B): 1 for a win, a half each for a halved match."""
    if diff > 0:
        a, b = 1.0, 0.0
    elif diff < 0:
        a, b = 0.0, 1.0
    else:
        a, b = 0.5, 0.5
    factor = 2 if double_points else 1
    return a * factor, b * factor


def play_match(
    a_points: Sequence[Optional[int]],
    b_points: Sequence[Optional[int]],
    side_a: str = "A",
    side_b: str = "B",
    double_points: bool = False,
) -> MatchResult:
    """Resolve a match from per-hole side points (index 0 is hole 1).

    ``None`` marks a hole with no data for that side. Once the lead exceeds
    the holes left the match is decided; later holes are reported as not
    applicable and carry no points.
    """
    diff = 0
    thru = 0
    decided_at: Optional[int] = None
    holes: List[HoleOutcome] = []

    for number in range(1, HOLE_COUNT + 1):
        if decided_at is not None:
            holes.append(HoleOutcome(hole_number=number, winner=HoleWinner.NOT_APPLICABLE))
            continue

        a = a_points[number - 1] if number <= len(a_points) else None
        b = b_points[number - 1] if number <= len(b_points) else None
        winner = resolve_hole(a, b)

        if winner == HoleWinner.NO_DATA:
            holes.append(HoleOutcome(
                hole_number=number, a_points=a, b_points=b, winner=winner,
                running_diff=diff if thru else None,
            ))
            continue

        thru = number
        if winner == HoleWinner.A:
            diff += 1
        elif winner == HoleWinner.B:
            diff -= 1
        holes.append(HoleOutcome(
            hole_number=number, a_points=a, b_points=b, winner=winner, running_diff=diff,
        ))

        if abs(diff) > HOLE_COUNT - number:
            decided_at = number

    is_final = decided_at is not None or thru == HOLE_COUNT
    result = MatchResult(
        side_a=side_a,
        side_b=side_b,
        holes=holes,
        diff=diff,
        thru=thru,
        decided_at_hole=decided_at,
        is_final=is_final,
        live_text=live_text(diff, thru, side_a, side_b),
    )
    if is_final:
        result.final_text = final_text(diff, decided_at, side_a, side_b)
        result.points_a, result.points_b = match_points(diff, double_points)
    return result


def side_hole_points(
    snapshot: TourSnapshot,
    round_: Round,
    side: Side,
    match_format: MatchFormat,
) -> List[Optional[int]]:
    """Per-hole points for a side.

    Individual sides use the nominated (first) player. Better-ball sides take
    the best of the teammates who have an entry on the hole.
    """
    player_ids = side.player_ids
    if match_format == MatchFormat.INDIVIDUAL_MATCHPLAY:
        player_ids = player_ids[:1]

    cards: Dict[str, List[Optional[int]]] = {}
    for player_id in player_ids:
        points = hole_points(snapshot, round_, player_id)
        if points is not None:
            cards[player_id] = points

    result: List[Optional[int]] = []
    for index in range(HOLE_COUNT):
        entered = [card[index] for card in cards.values() if card[index] is not None]
        result.append(max(entered) if entered else None)
    return result


def resolve_match(snapshot: TourSnapshot, round_: Round, match: Match) -> MatchResult:
    a = side_hole_points(snapshot, round_, match.side_a, match.format)
    b = side_hole_points(snapshot, round_, match.side_b, match.format)
    return play_match(a, b, match.side_a.label, match.side_b.label, match.double_points)


def round_matches(snapshot: TourSnapshot, round_id: str) -> List[MatchResult]:
    round_ = snapshot.get_round(round_id)
    if round_ is None:
        return []
    return [
        resolve_match(snapshot, round_, m)
        for m in snapshot.matches
        if m.round_id == round_id
    ]
