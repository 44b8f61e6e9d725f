"""Appleby rehandicapping.

Handicaps move only at adjustment rounds (round numbers on the 3-round
cycle: 3, 6, 9, ...). At each one the field's 6th best Stableford score is
the cut-off, and each eligible player moves 0.1 per point away from it:

    step = (cutoff - score) * 0.1

The cumulative adjustment is capped at [-2.0, +4.0]. Rounds between
adjustment rounds play off ``round_half_up(start + cumulative)`` as of the
last adjustment round before them; rounds up to the first one use the seed.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from models.round import Round
from models.round_player import RoundPlayer
from models.snapshot import TourSnapshot
from scoring.rounding import clamp, round_half_up, to_tenths
from scoring.totals import round_total

logger = logging.getLogger(__name__)

APPLEBY_CYCLE = 3
APPLEBY_MIN_FIELD = 6
CUMULATIVE_FLOOR = Decimal("-2.0")
CUMULATIVE_CEILING = Decimal("4.0")
POINT_VALUE = Decimal("0.1")


class ApplebyStep(BaseModel):
    round_no: int
    round_id: str
    score: Optional[int] = None
    cutoff: Optional[int] = None
    is_cutoff_score: bool = False
    step: Optional[Decimal] = None
    capped: bool = False
    cumulative: Decimal = Decimal("0.0")
    start_plus: Decimal = Decimal("0.0")
    start_plus_rounded: int = 0


class ApplebyPlayer(BaseModel):
    player_id: str
    name: str
    start_exact: Decimal
    seed: int
    steps: List[ApplebyStep] = Field(default_factory=list)

    def step_for(self, round_no: int) -> Optional[ApplebyStep]:
        for step in self.steps:
            if step.round_no == round_no:
                return step
        return None


class ApplebyPreview(BaseModel):
    tour_id: str
    tour_name: str
    adjustment_rounds: List[int] = Field(default_factory=list)
    cutoffs: Dict[int, Optional[int]] = Field(default_factory=dict)
    players: List[ApplebyPlayer] = Field(default_factory=list)
    can_update: bool = False
    cannot_update_reason: Optional[str] = None


def is_adjustment_round(round_no: Optional[int]) -> bool:
    return round_no is not None and round_no > 0 and round_no % APPLEBY_CYCLE == 0


def adjustment_rounds(snapshot: TourSnapshot) -> Dict[int, Round]:
    """Adjustment rounds by round number, first in tour order wins a duplicate."""
    found: Dict[int, Round] = {}
    for round_ in snapshot.rounds:
        if is_adjustment_round(round_.round_no) and round_.round_no not in found:
            found[round_.round_no] = round_
    return dict(sorted(found.items()))


def cutoff_score(scores: List[int]) -> Optional[int]:
    """6th best score, or ``None`` with fewer than six scores."""
    if len(scores) < APPLEBY_MIN_FIELD:
        return None
    return sorted(scores, reverse=True)[APPLEBY_MIN_FIELD - 1]


def apply_step(cumulative: Decimal, cutoff: int, score: int):
    """Returns (applied_step, capped, new_cumulative)."""
    raw_step = to_tenths((cutoff - score) * POINT_VALUE)
    new_cumulative = to_tenths(clamp(to_tenths(cumulative + raw_step), CUMULATIVE_FLOOR, CUMULATIVE_CEILING))
    applied = to_tenths(new_cumulative - cumulative)
    return applied, applied != raw_step, new_cumulative


def _eligible_score(snapshot: TourSnapshot, round_: Round, player_id: str, seed: int) -> Optional[int]:
    if not snapshot.is_playing(round_.id, player_id):
        return None
    if snapshot.holes_filled(round_.id, player_id) != 18:
        return None
    stored = snapshot.stored_handicap(round_.id, player_id)
    return round_total(snapshot, round_, player_id, stored if stored is not None else seed)


def compute_appleby(snapshot: TourSnapshot) -> ApplebyPreview:
    tour = snapshot.tour
    preview = ApplebyPreview(tour_id=tour.id, tour_name=tour.name)
    targets = adjustment_rounds(snapshot)
    preview.adjustment_rounds = list(targets)

    seeds = {}
    for player in snapshot.players:
        exact = player.starting_handicap_exact()
        seeds[player.player_id] = (exact, max(0, round_half_up(exact)))

    scores: Dict[int, Dict[str, Optional[int]]] = {}
    for round_no, round_ in targets.items():
        scores[round_no] = {
            p.player_id: _eligible_score(snapshot, round_, p.player_id, seeds[p.player_id][1])
            for p in snapshot.players
        }
        field = [s for s in scores[round_no].values() if s is not None]
        preview.cutoffs[round_no] = cutoff_score(field)
        if preview.cutoffs[round_no] is None:
            logger.debug(
                "Appleby round %s of tour %s has %d eligible scores, no cut-off",
                round_no, tour.id, len(field),
            )

    for player in sorted(snapshot.players, key=lambda p: p.name.lower()):
        exact, seed = seeds[player.player_id]
        row = ApplebyPlayer(player_id=player.player_id, name=player.name, start_exact=exact, seed=seed)
        cumulative = Decimal("0.0")
        for round_no, round_ in targets.items():
            score = scores[round_no][player.player_id]
            cutoff = preview.cutoffs[round_no]
            step = ApplebyStep(
                round_no=round_no,
                round_id=round_.id,
                score=score,
                cutoff=cutoff,
                is_cutoff_score=score is not None and cutoff is not None and score == cutoff,
            )
            if score is not None and cutoff is not None:
                step.step, step.capped, cumulative = apply_step(cumulative, cutoff, score)
            step.cumulative = cumulative
            step.start_plus = to_tenths(exact + cumulative)
            step.start_plus_rounded = round_half_up(step.start_plus)
            row.steps.append(step)
        preview.players.append(row)

    if not snapshot.players:
        preview.cannot_update_reason = "No players found."
    elif not targets:
        preview.cannot_update_reason = "No adjustment rounds found yet for this tour."
    elif not any(c is not None for c in preview.cutoffs.values()):
        preview.cannot_update_reason = (
            f"Need at least {APPLEBY_MIN_FIELD} complete playing players on an adjustment "
            "round to establish the cut-off score."
        )
    preview.can_update = preview.cannot_update_reason is None
    return preview


def segment_handicap(player: ApplebyPlayer, round_no: int) -> int:
    """Handicap played in ``round_no``: the result of the last adjustment round before it."""
    value = player.seed
    for step in player.steps:
        if step.round_no < round_no:
            value = step.start_plus_rounded
    return max(0, value)


def appleby_participation_rows(snapshot: TourSnapshot, preview: ApplebyPreview) -> List[RoundPlayer]:
    """Rows to upsert for every numbered round and player."""
    by_player = {p.player_id: p for p in preview.players}
    rows = []
    numbered = sorted((r for r in snapshot.rounds if r.round_no is not None), key=lambda r: r.round_no)
    for round_ in numbered:
        for player in snapshot.players:
            row = by_player.get(player.player_id)
            if row is None:
                continue
            existing = snapshot.round_player(round_.id, player.player_id)
            rows.append(RoundPlayer(
                round_id=round_.id,
                player_id=player.player_id,
                playing=existing.playing if existing else False,
                playing_handicap=segment_handicap(row, round_.round_no),
                tee=snapshot.tee_for(round_.id, player.player_id),
            ))
    return rows
