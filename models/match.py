from enum import Enum
from pydantic import Field, field_validator
from typing import List, Optional

from .base import BaseTourModel


class MatchFormat(str, Enum):
    INDIVIDUAL_MATCHPLAY = "INDIVIDUAL_MATCHPLAY"
    BETTERBALL_MATCHPLAY = "BETTERBALL_MATCHPLAY"


class HoleWinner(str, Enum):
    A = "A"
    B = "B"
    HALVED = "HALVED"
    NO_DATA = "NO_DATA"
    NOT_APPLICABLE = "NOT_APPLICABLE"  # hole played after the match was decided


class Side(BaseTourModel):
    """One side of a match: a single player or a better-ball pair."""
    label: str
    player_ids: List[str] = Field(..., min_length=1, max_length=2)


class Match(BaseTourModel):
    id: Optional[str] = None
    round_id: Optional[str] = None
    format: MatchFormat = MatchFormat.INDIVIDUAL_MATCHPLAY
    side_a: Side
    side_b: Side
    double_points: bool = False

    @field_validator('side_b')
    @classmethod
    def validate_distinct_players(cls, v, info):
        side_a = info.data.get('side_a')
        if side_a and set(side_a.player_ids) & set(v.player_ids):
            raise ValueError("A player cannot be on both sides of a match")
        return v


class HoleOutcome(BaseTourModel):
    hole_number: int = Field(..., ge=1, le=18)
    a_points: Optional[int] = None
    b_points: Optional[int] = None
    winner: HoleWinner = HoleWinner.NO_DATA
    running_diff: Optional[int] = None


class MatchResult(BaseTourModel):
    """Resolved state of a match. ``diff`` is positive when side A leads."""
    side_a: str
    side_b: str
    holes: List[HoleOutcome] = Field(default_factory=list)
    diff: int = 0
    thru: int = 0
    decided_at_hole: Optional[int] = None
    is_final: bool = False
    final_text: Optional[str] = None
    live_text: str = "Not started"
    points_a: Optional[float] = None
    points_b: Optional[float] = None

    @property
    def leader(self) -> Optional[str]:
        if self.diff > 0:
            return self.side_a
        if self.diff < 0:
            return self.side_b
        return None
