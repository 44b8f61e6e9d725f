"""Matchplay API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from database.db_manager import DatabaseManager
from api.dependencies import get_db, load_snapshot_or_404
from api.schemas import MatchPointsResponse, RoundMatchesResponse
from scoring import match_points_table, round_matches

router = APIRouter()


@router.get("/{tour_id}/rounds/{round_id}/matches", response_model=RoundMatchesResponse)
async def get_round_matches(tour_id: str, round_id: str, db: DatabaseManager = Depends(get_db)):
    snapshot = await load_snapshot_or_404(db, tour_id)
    if snapshot.get_round(round_id) is None:
        raise HTTPException(404, "Round not found")
    return RoundMatchesResponse(
        tour_id=tour_id,
        round_id=round_id,
        matches=round_matches(snapshot, round_id),
    )


@router.get("/{tour_id}/matches/points", response_model=MatchPointsResponse)
async def get_match_points(tour_id: str, db: DatabaseManager = Depends(get_db)):
    snapshot = await load_snapshot_or_404(db, tour_id)
    return MatchPointsResponse(tour_id=tour_id, rows=match_points_table(snapshot))
