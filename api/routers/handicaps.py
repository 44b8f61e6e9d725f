"""Handicap preview and commit endpoints (sequential and Appleby)."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from database.db_manager import DatabaseManager
from api.dependencies import (
    RecalculationInProgress,
    get_db,
    load_snapshot_or_404,
    tour_recalculation_lock,
)
from api.schemas import HandicapCommitResponse
from scoring import (
    ApplebyPreview,
    HandicapRecalculation,
    appleby_participation_rows,
    compute_appleby,
    participation_rows,
    recalculate_handicaps,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{tour_id}/handicaps", response_model=HandicapRecalculation)
async def preview_handicaps(tour_id: str, db: DatabaseManager = Depends(get_db)):
    snapshot = await load_snapshot_or_404(db, tour_id)
    return recalculate_handicaps(snapshot)


@router.post("/{tour_id}/handicaps/recalculate", response_model=HandicapCommitResponse)
async def commit_handicaps(tour_id: str, db: DatabaseManager = Depends(get_db)):
    """Recompute every playing handicap of the tour and upsert the participation rows."""
    try:
        async with tour_recalculation_lock(tour_id):
            snapshot = await load_snapshot_or_404(db, tour_id)
            recalculation = recalculate_handicaps(snapshot)
            written = await db.save_round_players(participation_rows(snapshot, recalculation))
    except RecalculationInProgress:
        raise HTTPException(409, "A recalculation for this tour is already running")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Handicap commit failed for tour %s", tour_id)
        raise HTTPException(500, f"Recalculation failed: {type(e).__name__}: {e}")

    return HandicapCommitResponse(
        tour_id=tour_id,
        rows_written=written,
        halted_at_round=recalculation.halted_at_round,
        halt_reason=recalculation.halt_reason,
        handicaps={r.round_id: r.handicaps for r in recalculation.rounds},
    )


@router.get("/{tour_id}/appleby", response_model=ApplebyPreview)
async def preview_appleby(tour_id: str, db: DatabaseManager = Depends(get_db)):
    snapshot = await load_snapshot_or_404(db, tour_id)
    return compute_appleby(snapshot)


@router.post("/{tour_id}/appleby/apply", response_model=HandicapCommitResponse)
async def apply_appleby(tour_id: str, db: DatabaseManager = Depends(get_db)):
    """Write the Appleby segment handicap to every numbered round of the tour."""
    try:
        async with tour_recalculation_lock(tour_id):
            snapshot = await load_snapshot_or_404(db, tour_id)
            preview = compute_appleby(snapshot)
            if not preview.can_update:
                raise HTTPException(400, preview.cannot_update_reason)
            rows = appleby_participation_rows(snapshot, preview)
            written = await db.save_round_players(rows)
    except RecalculationInProgress:
        raise HTTPException(409, "A recalculation for this tour is already running")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Appleby commit failed for tour %s", tour_id)
        raise HTTPException(500, f"Appleby update failed: {type(e).__name__}: {e}")

    handicaps = {}
    for row in rows:
        handicaps.setdefault(row.round_id, {})[row.player_id] = row.playing_handicap
    return HandicapCommitResponse(tour_id=tour_id, rows_written=written, handicaps=handicaps)
