"""Writes of per-round playing handicaps."""

import logging
from typing import Iterable

import asyncpg

from models import RoundPlayer
from database.converters import round_player_to_row
from database.exceptions import translate_pg_error

logger = logging.getLogger(__name__)


class RoundPlayerRepositoryDB:
    """Upserts of round_players keyed by (round_id, player_id)."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def upsert_round_players(self, rows: Iterable[RoundPlayer]) -> int:
        """Insert or overwrite participation rows. Last writer wins.

        Returns the number of rows written.
        """
        tuples = [round_player_to_row(rp) for rp in rows]
        if not tuples:
            return 0
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    await conn.executemany(
                        """INSERT INTO round_players
                           (round_id, player_id, playing, playing_handicap, tee)
                           VALUES ($1, $2, $3, $4, $5)
                           ON CONFLICT (round_id, player_id) DO UPDATE SET
                               playing = EXCLUDED.playing,
                               playing_handicap = EXCLUDED.playing_handicap,
                               tee = EXCLUDED.tee""",
                        tuples,
                    )
        except asyncpg.PostgresError as e:
            raise translate_pg_error(e) from e
        logger.info("Upserted %d round_players rows", len(tuples))
        return len(tuples)
