from enum import Enum
from typing import Optional

from pydantic import Field

from .base import BaseTourModel
from .hole import Tee


class Participation(str, Enum):
    """Lifecycle of a player within one round."""
    UNKNOWN = "unknown"                        # no round_players row
    NOT_PLAYING = "not_playing"
    PLAYING_INCOMPLETE = "playing_incomplete"
    PLAYING_COMPLETE = "playing_complete"


class RoundPlayer(BaseTourModel):
    """Participation record keyed by (round_id, player_id)."""
    round_id: str
    player_id: str
    playing: bool = False
    playing_handicap: Optional[int] = Field(None, ge=0)
    tee: Optional[Tee] = None

    @property
    def key(self):
        return (self.round_id, self.player_id)
