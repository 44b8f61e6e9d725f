from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from .base import BaseTourModel


class Round(BaseTourModel):
    """A tour round. Ordering is by ``round_no`` first, never insertion order."""
    id: str
    tour_id: Optional[str] = None
    course_id: Optional[str] = None
    round_no: Optional[int] = None
    played_on: Optional[date] = None
    created_at: Optional[datetime] = None
    name: Optional[str] = None

    def sort_key(self) -> Tuple:
        """round_no, then played_on, then created_at (each nulls last), then id."""
        return (
            self.round_no is None, self.round_no or 0,
            self.played_on is None, self.played_on or date.min,
            self.created_at is None, self.created_at or datetime.min,
            self.id,
        )

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        if self.round_no is not None:
            return f"R{self.round_no}"
        return self.id


def order_rounds(rounds: Iterable[Round]) -> List[Round]:
    """Return rounds in tour order."""
    return sorted(rounds, key=lambda r: r.sort_key())
