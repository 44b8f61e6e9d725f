import asyncio
from contextlib import asynccontextmanager
from typing import Dict

from fastapi import HTTPException, Request

from models import TourSnapshot
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError


class RecalculationInProgress(Exception):
    """Another handicap recalculation for the same tour has not finished."""


_tour_locks: Dict[str, asyncio.Lock] = {}


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


async def load_snapshot_or_404(db: DatabaseManager, tour_id: str) -> TourSnapshot:
    try:
        return await db.load_tour_snapshot(tour_id)
    except (NotFoundError, ValueError):
        raise HTTPException(404, "Tour not found")


@asynccontextmanager
async def tour_recalculation_lock(tour_id: str):
    """Serialize recalculations per tour. A concurrent request is refused, not queued."""
    lock = _tour_locks.setdefault(tour_id, asyncio.Lock())
    if lock.locked():
        raise RecalculationInProgress(tour_id)
    try:
        async with lock:
            yield
    finally:
        if not lock.locked() and _tour_locks.get(tour_id) is lock:
            del _tour_locks[tour_id]
