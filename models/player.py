import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from .base import BaseTourModel
from .hole import Tee

TENTH = Decimal("0.1")


class TourPlayer(BaseTourModel):
    """A player as registered on one tour.

    ``starting_handicap`` is the tour-level override; ``global_handicap`` is
    the player's default from the players table.
    """
    player_id: str
    name: str = "(missing player)"
    starting_handicap: Optional[float] = None
    global_handicap: Optional[float] = None
    gender: Optional[Tee] = None

    @property
    def default_tee(self) -> Tee:
        return self.gender or Tee.MEN

    def starting_handicap_int(self) -> int:
        """Integer starting handicap: override else global, floored, never negative."""
        value = self.starting_handicap
        if value is None:
            value = self.global_handicap
        if value is None:
            return 0
        return max(0, math.floor(value))

    def starting_handicap_exact(self) -> Decimal:
        """One-decimal starting handicap used by the Appleby trail."""
        value = self.starting_handicap
        if value is None:
            value = self.global_handicap
        if value is None:
            return Decimal("0.0")
        exact = Decimal(str(value)).quantize(TENTH, rounding=ROUND_HALF_UP)
        return max(Decimal("0.0"), exact)
