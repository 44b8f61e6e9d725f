from enum import Enum
from pydantic import Field
from typing import List, Optional

from .base import BaseTourModel


class GroupKind(str, Enum):
    PAIR = "pair"
    TEAM = "team"


class Group(BaseTourModel):
    """A fixed pair or team of tour players."""
    id: str
    name: Optional[str] = None
    kind: GroupKind = GroupKind.PAIR
    player_ids: List[str] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return self.name or self.id
