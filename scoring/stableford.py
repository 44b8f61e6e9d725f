"""Net Stableford scoring for a single hole."""

from typing import Any, Optional, Union

from models.hole_score import HoleScore

MAX_POINTS = 10


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def normalize_handicap(playing_handicap: Any) -> int:
    """Clamp to >= 0 and floor. Garbage becomes 0."""
    try:
        value = float(playing_handicap)
    except (TypeError, ValueError):
        return 0
    if value != value or value in (float("inf"), float("-inf")):
        return 0
    return max(0, int(value // 1))


def strokes_received(playing_handicap: Any, stroke_index: Any) -> int:
    """Handicap strokes a player receives on a hole.

    One stroke per full 18 of handicap, plus one more on the holes whose
    stroke index is within the remainder.
    """
    hcp = normalize_handicap(playing_handicap)
    base, remainder = divmod(hcp, 18)
    si = _as_int(stroke_index)
    extra = 1 if 0 < si <= remainder else 0
    return base + extra


def stableford_points(net_strokes: int, par: int) -> int:
    """2 points for net par, one more per stroke under, one fewer per stroke over."""
    return max(0, min(MAX_POINTS, 2 + (par - net_strokes)))


def net_stableford_points(
    raw_score: Union[HoleScore, str, int, None],
    par: Any,
    stroke_index: Any,
    playing_handicap: Any,
) -> int:
    """Net Stableford points in [0, 10] for one hole.

    ``raw_score`` may be a HoleScore or a score-entry value ("5", "P", "").
    Empty, invalid and pickup entries all score 0; callers that care about
    completeness must check the raw score themselves.
    """
    strokes = _strokes_of(raw_score)
    par_value = _as_int(par)
    if strokes is None or par_value <= 0:
        return 0
    net = strokes - strokes_received(playing_handicap, stroke_index)
    return stableford_points(net, par_value)


def _strokes_of(raw_score) -> Optional[int]:
    if isinstance(raw_score, HoleScore):
        return raw_score.strokes
    if isinstance(raw_score, bool):
        return None
    if isinstance(raw_score, int):
        return raw_score if raw_score > 0 else None
    return HoleScore.from_raw(1, raw_score).strokes
