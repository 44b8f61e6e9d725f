from pydantic import Field, model_validator
from typing import Any, Optional

from .base import BaseTourModel

PICKUP_MARKER = "P"


class HoleScore(BaseTourModel):
    """A player's raw entry for one hole.

    Three shapes are possible: a positive stroke count, a pickup, or nothing
    entered yet (``strokes`` is None and ``pickup`` is False).
    """
    hole_number: int = Field(..., ge=1, le=18)
    strokes: Optional[int] = Field(None, ge=1)
    pickup: bool = False

    @model_validator(mode='after')
    def validate_pickup_has_no_strokes(self):
        if self.pickup and self.strokes is not None:
            raise ValueError("A pickup cannot also carry a stroke count")
        return self

    @classmethod
    def from_raw(cls, hole_number: int, raw: Any) -> "HoleScore":
        """Parse a score-entry value ("5", "P", "", None, 5).

        Anything non-numeric or non-positive that is not the pickup marker
        is treated as not yet entered.
        """
        if raw is None:
            return cls(hole_number=hole_number)
        text = str(raw).strip().upper()
        if text == PICKUP_MARKER:
            return cls(hole_number=hole_number, pickup=True)
        try:
            value = float(text)
        except ValueError:
            return cls(hole_number=hole_number)
        if not value.is_integer() or value <= 0:
            return cls(hole_number=hole_number)
        return cls(hole_number=hole_number, strokes=int(value))

    @property
    def is_empty(self) -> bool:
        return not self.pickup and self.strokes is None

    @property
    def is_entered(self) -> bool:
        """Pickups count as entered for completeness checks."""
        return not self.is_empty
