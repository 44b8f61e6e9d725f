from enum import Enum
from pydantic import Field, field_validator
from typing import Dict, List

from .base import BaseTourModel


class Tee(str, Enum):
    """Tee set a par table belongs to."""
    MEN = "M"
    WOMEN = "F"

    @classmethod
    def normalize(cls, value) -> "Tee":
        """Anything that is not an explicit 'F' plays off the men's tees."""
        text = str(value if value is not None else "").strip().upper()
        return cls.WOMEN if text == "F" else cls.MEN


class Hole(BaseTourModel):
    """One hole of a course+tee par table."""
    number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=1)
    stroke_index: int = Field(..., ge=1, le=18)


class CourseTee(BaseTourModel):
    """Par and stroke index for the 18 holes of one course played off one tee."""
    course_id: str
    tee: Tee = Tee.MEN
    holes: List[Hole] = Field(default_factory=list)

    @field_validator('holes')
    @classmethod
    def validate_unique_numbers(cls, v):
        numbers = [h.number for h in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Duplicate hole numbers in par table")
        return sorted(v, key=lambda h: h.number)

    def by_number(self) -> Dict[int, Hole]:
        return {h.number: h for h in self.holes}

    def is_complete(self) -> bool:
        """True when all 18 holes have par data."""
        return len(self.holes) == 18

    @property
    def par(self) -> int:
        return sum(h.par for h in self.holes)
