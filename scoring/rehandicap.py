"""Sequential round-by-round rehandicapping.

Walks the tour's rounds in order. After each complete round, every player who
played moves a third of the way from their score towards the field average:

    next_ph = round_half_up(ph + (field_average - score) / 3)

bounded by ``[ceil(start / 2), start + 3]``. Propagation stops at the first
round that cannot be used (no course, no par data, or incomplete cards) so
that handicaps are never derived from partial data.
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from models.round_player import RoundPlayer
from models.snapshot import TourSnapshot
from scoring.rounding import clamp, round_half_up
from scoring.totals import is_round_complete, round_total

logger = logging.getLogger(__name__)

MAX_INCREASE = 3


class RoundHandicaps(BaseModel):
    """Per-round view of a recalculation, for display and audit."""
    round_id: str
    computed: bool = False
    field_average: Optional[int] = None
    scores: Dict[str, Optional[int]] = Field(default_factory=dict)
    handicaps: Dict[str, int] = Field(default_factory=dict)


class HandicapRecalculation(BaseModel):
    tour_id: str
    enabled: bool
    rounds: List[RoundHandicaps] = Field(default_factory=list)
    halted_at_round: Optional[str] = None
    halt_reason: Optional[str] = None

    def handicap(self, round_id: str, player_id: str) -> Optional[int]:
        for r in self.rounds:
            if r.round_id == round_id:
                return r.handicaps.get(player_id)
        return None


def handicap_bounds(starting_handicap: int) -> Tuple[int, int]:
    return math.ceil(starting_handicap / 2), starting_handicap + MAX_INCREASE


def next_playing_handicap(
    current: int,
    field_average: int,
    score: int,
    starting_handicap: int,
) -> int:
    raw = round_half_up(Fraction(current) + Fraction(field_average - score, 3))
    low, high = handicap_bounds(starting_handicap)
    return clamp(raw, low, high)


def field_average(scores: List[int]) -> Optional[int]:
    if not scores:
        return None
    return round_half_up(Fraction(sum(scores), len(scores)))


def _unusable_reason(snapshot: TourSnapshot, round_) -> Optional[str]:
    if not round_.course_id:
        return "round has no course"
    for player in snapshot.playing_players(round_.id):
        table = snapshot.par_table(round_, player.player_id)
        if table is None or not table.is_complete():
            return "missing par data"
    if not is_round_complete(snapshot, round_.id):
        return "round incomplete"
    return None


def recalculate_handicaps(snapshot: TourSnapshot) -> HandicapRecalculation:
    """Compute the playing handicap for every (round, player) of the tour.

    Rounds at or after the halt point keep their stored handicap, or the
    starting handicap if none was ever stored. With rehandicapping disabled
    every value is the starting handicap.
    """
    tour = snapshot.tour
    start = {p.player_id: p.starting_handicap_int() for p in snapshot.players}
    result = HandicapRecalculation(tour_id=tour.id, enabled=tour.rehandicapping_enabled)

    if not tour.rehandicapping_enabled:
        for round_ in snapshot.rounds:
            result.rounds.append(RoundHandicaps(round_id=round_.id, handicaps=dict(start)))
        return result

    computed: Dict[str, Dict[str, int]] = {}
    by_round: Dict[str, RoundHandicaps] = {r.id: RoundHandicaps(round_id=r.id) for r in snapshot.rounds}

    if snapshot.rounds:
        computed[snapshot.rounds[0].id] = dict(start)

    for index, round_ in enumerate(snapshot.rounds):
        current = computed.get(round_.id)
        if current is None:
            break

        reason = _unusable_reason(snapshot, round_)
        if reason:
            result.halted_at_round = round_.id
            result.halt_reason = reason
            logger.debug("Rehandicapping for tour %s halted at round %s: %s", tour.id, round_.id, reason)
            break

        scores: Dict[str, Optional[int]] = {}
        for player in snapshot.players:
            if not snapshot.is_playing(round_.id, player.player_id):
                scores[player.player_id] = None
                continue
            scores[player.player_id] = round_total(snapshot, round_, player.player_id, current[player.player_id])

        average = field_average([s for s in scores.values() if s is not None])
        entry = by_round[round_.id]
        entry.computed = True
        entry.field_average = average
        entry.scores = scores

        if index + 1 >= len(snapshot.rounds):
            continue

        following: Dict[str, int] = {}
        for player in snapshot.players:
            pid = player.player_id
            score = scores.get(pid)
            if score is None or average is None:
                following[pid] = current[pid]
                continue
            following[pid] = next_playing_handicap(current[pid], average, score, start[pid])
        computed[snapshot.rounds[index + 1].id] = following

    for round_ in snapshot.rounds:
        entry = by_round[round_.id]
        values = computed.get(round_.id, {})
        for player in snapshot.players:
            pid = player.player_id
            if pid in values:
                entry.handicaps[pid] = values[pid]
                continue
            stored = snapshot.stored_handicap(round_.id, pid)
            entry.handicaps[pid] = stored if stored is not None else start[pid]
        result.rounds.append(entry)
    return result


def participation_rows(snapshot: TourSnapshot, recalculation: HandicapRecalculation) -> List[RoundPlayer]:
    """Rows to upsert: one per (round, player), keeping playing flag and tee."""
    rows = []
    for entry in recalculation.rounds:
        for player in snapshot.players:
            pid = player.player_id
            existing = snapshot.round_player(entry.round_id, pid)
            rows.append(RoundPlayer(
                round_id=entry.round_id,
                player_id=pid,
                playing=existing.playing if existing else False,
                playing_handicap=entry.handicaps[pid],
                tee=snapshot.tee_for(entry.round_id, pid),
            ))
    return rows
