"""Leaderboard API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from models import GroupKind
from database.db_manager import DatabaseManager
from api.dependencies import get_db, load_snapshot_or_404
from api.schemas import WinnersResponse
from scoring import (
    GroupRule,
    Leaderboard,
    competition_winners,
    eclectic_leaderboard,
    group_leaderboard,
    tour_leaderboard,
)

router = APIRouter()


@router.get("/{tour_id}/leaderboard", response_model=Leaderboard)
async def get_tour_leaderboard(
    tour_id: str,
    best_n: Optional[int] = Query(None, ge=1),
    must_include_final: bool = False,
    exclude_incomplete: bool = False,
    db: DatabaseManager = Depends(get_db),
):
    snapshot = await load_snapshot_or_404(db, tour_id)
    return tour_leaderboard(
        snapshot,
        best_n=best_n,
        must_include_final=must_include_final,
        exclude_incomplete=exclude_incomplete,
    )


@router.get("/{tour_id}/leaderboard/groups", response_model=Leaderboard)
async def get_group_leaderboard(
    tour_id: str,
    kind: GroupKind = GroupKind.PAIR,
    rule: Optional[GroupRule] = None,
    best_m: Optional[int] = Query(None, ge=1),
    best_n: Optional[int] = Query(None, ge=1),
    must_include_final: bool = False,
    exclude_incomplete: bool = False,
    db: DatabaseManager = Depends(get_db),
):
    """Pairs default to best-ball, teams to best-M minus zeros."""
    snapshot = await load_snapshot_or_404(db, tour_id)
    if rule is None:
        rule = GroupRule.BEST_BALL if kind == GroupKind.PAIR else GroupRule.BEST_M_MINUS_ZEROS
    groups = [g for g in snapshot.groups if g.kind == kind]
    return group_leaderboard(
        snapshot,
        groups,
        rule,
        best_m=best_m,
        best_n=best_n,
        must_include_final=must_include_final,
        exclude_incomplete=exclude_incomplete,
    )


@router.get("/{tour_id}/leaderboard/eclectic", response_model=Leaderboard)
async def get_eclectic(tour_id: str, db: DatabaseManager = Depends(get_db)):
    snapshot = await load_snapshot_or_404(db, tour_id)
    return eclectic_leaderboard(snapshot)


@router.get("/{tour_id}/rounds/{round_id}/winners", response_model=WinnersResponse)
async def get_round_winners(tour_id: str, round_id: str, db: DatabaseManager = Depends(get_db)):
    snapshot = await load_snapshot_or_404(db, tour_id)
    if snapshot.get_round(round_id) is None:
        raise HTTPException(404, "Round not found")
    return WinnersResponse(
        tour_id=tour_id,
        round_id=round_id,
        cutoff_position=max(1, len(snapshot.players) // 2),
        winners=competition_winners(snapshot, round_id),
    )
