from pydantic import Field
from typing import Optional

from .base import BaseTourModel


class Tour(BaseTourModel):
    """Tour settings that drive scoring and rehandicapping."""
    id: str
    name: str = "Tour"
    rehandicapping_enabled: bool = False
    default_team_best_m: int = Field(2, ge=1)
    description: Optional[str] = None
