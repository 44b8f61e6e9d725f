"""API-specific response models for aggregated data."""

from pydantic import BaseModel
from typing import Dict, List, Optional

from models import MatchResult
from scoring import LeaderboardRow


class WinnersResponse(BaseModel):
    """Competition winners for one round."""
    tour_id: str
    round_id: str
    cutoff_position: int
    winners: List[LeaderboardRow]


class RoundMatchesResponse(BaseModel):
    tour_id: str
    round_id: str
    matches: List[MatchResult]


class MatchPointsResponse(BaseModel):
    tour_id: str
    rows: List[LeaderboardRow]


class HandicapCommitResponse(BaseModel):
    """Outcome of writing recalculated playing handicaps back to the store."""
    tour_id: str
    rows_written: int
    halted_at_round: Optional[str] = None
    halt_reason: Optional[str] = None
    handicaps: Dict[str, Dict[str, int]] = {}
