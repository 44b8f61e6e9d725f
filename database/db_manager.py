from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import asyncpg

from models import RoundPlayer, TourSnapshot
from database.exceptions import DatabaseError
from database.repositories import RoundPlayerRepositoryDB, TourRepositoryDB


class DatabaseManager:
    """
    Facade over the repositories, shared by the API through app state.

    Notes:
    - Raw SQL through asyncpg (no ORM) keeps the store contract explicit.
    - Scoring never runs against live queries: callers load a snapshot first.
    """

    def __init__(self, pool: asyncpg.Pool, schema_path: Optional[str] = None) -> None:
        self._pool = pool
        self.tours = TourRepositoryDB(pool)
        self.round_players = RoundPlayerRepositoryDB(pool)
        self.schema_path = Path(
            schema_path or Path(__file__).with_name("schema.sql")
        ).resolve()

    async def initialize_schema(self) -> None:
        """Create tables defined in `database/schema.sql`."""
        if not self.schema_path.exists():
            raise DatabaseError(f"Schema file not found: {self.schema_path}")
        sql_text = self.schema_path.read_text(encoding="utf-8")
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(sql_text)

    async def load_tour_snapshot(self, tour_id: str) -> TourSnapshot:
        return await self.tours.load_snapshot(tour_id)

    async def save_round_players(self, rows: Iterable[RoundPlayer]) -> int:
        return await self.round_players.upsert_round_players(rows)
