from .appleby import (
    ApplebyPreview,
    appleby_participation_rows,
    compute_appleby,
    segment_handicap,
)
from .leaderboards import (
    GroupRule,
    Leaderboard,
    LeaderboardRow,
    competition_winners,
    eclectic_leaderboard,
    group_leaderboard,
    match_points_table,
    tour_leaderboard,
)
from .matchplay import play_match, resolve_match, round_matches
from .rehandicap import HandicapRecalculation, participation_rows, recalculate_handicaps
from .rounding import round_half_up, to_tenths
from .stableford import net_stableford_points, strokes_received
from .totals import best_n_total, is_round_complete, round_total, sum_best_n

__all__ = [
    "ApplebyPreview",
    "GroupRule",
    "HandicapRecalculation",
    "Leaderboard",
    "LeaderboardRow",
    "appleby_participation_rows",
    "best_n_total",
    "competition_winners",
    "compute_appleby",
    "eclectic_leaderboard",
    "group_leaderboard",
    "is_round_complete",
    "match_points_table",
    "net_stableford_points",
    "participation_rows",
    "play_match",
    "recalculate_handicaps",
    "resolve_match",
    "round_half_up",
    "round_matches",
    "round_total",
    "segment_handicap",
    "strokes_received",
    "sum_best_n",
    "to_tenths",
    "tour_leaderboard",
]
