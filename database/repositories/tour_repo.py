"""Read access to everything a tour's scoring depends on."""

import asyncpg
from uuid import UUID

from models import TourSnapshot
from database.converters import snapshot_from_rows
from database.exceptions import NotFoundError


class TourRepositoryDB:
    """Async snapshot reads for one tour: rounds, players, pars, scores and matches."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def load_snapshot(self, tour_id: str) -> TourSnapshot:
        """Gather every row set for the tour on one connection, then build the snapshot.

        All reads happen before any computation so the scoring core always
        sees one consistent, fully ordered view of the tour.
        """
        tid = UUID(tour_id)
        async with self._pool.acquire() as conn:
            async with conn.transaction(isolation="repeatable_read", readonly=True):
                tour_row = await conn.fetchrow("SELECT * FROM tours WHERE id = $1", tid)
                if not tour_row:
                    raise NotFoundError(f"Tour {tour_id} not found")

                round_rows = await conn.fetch(
                    """SELECT id, tour_id, course_id, round_no, played_on, created_at, name
                       FROM rounds WHERE tour_id = $1""",
                    tid,
                )
                player_rows = await conn.fetch(
                    """SELECT tp.player_id, tp.starting_handicap,
                              p.name, p.start_handicap, p.gender
                       FROM tour_players tp
                       JOIN players p ON p.id = tp.player_id
                       WHERE tp.tour_id = $1
                       ORDER BY p.name""",
                    tid,
                )
                round_ids = [r["id"] for r in round_rows]
                course_ids = list({r["course_id"] for r in round_rows if r["course_id"]})

                round_player_rows = await conn.fetch(
                    """SELECT round_id, player_id, playing, playing_handicap, tee
                       FROM round_players WHERE round_id = ANY($1::uuid[])""",
                    round_ids,
                )
                par_rows = await conn.fetch(
                    """SELECT course_id, tee, hole_number, par, stroke_index
                       FROM pars WHERE course_id = ANY($1::uuid[])""",
                    course_ids,
                )
                score_rows = await conn.fetch(
                    """SELECT round_id, player_id, hole_number, strokes, pickup
                       FROM scores WHERE round_id = ANY($1::uuid[])""",
                    round_ids,
                )
                group_rows = await conn.fetch(
                    "SELECT id, name, kind FROM tour_groups WHERE tour_id = $1 ORDER BY name",
                    tid,
                )
                member_rows = await conn.fetch(
                    """SELECT m.group_id, m.player_id, m.position
                       FROM tour_group_members m
                       JOIN tour_groups g ON g.id = m.group_id
                       WHERE g.tour_id = $1""",
                    tid,
                )
                match_rows = await conn.fetch(
                    """SELECT id, round_id, format, double_points,
                              side_a_label, side_b_label,
                              side_a_player_ids, side_b_player_ids
                       FROM matches WHERE round_id = ANY($1::uuid[])
                       ORDER BY created_at""",
                    round_ids,
                )

        return snapshot_from_rows(
            tour_row, round_rows, player_rows, round_player_rows,
            par_rows, score_rows, group_rows, member_rows, match_rows,
        )
