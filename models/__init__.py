from .base import BaseTourModel
from .group import Group, GroupKind
from .hole import CourseTee, Hole, Tee
from .hole_score import HoleScore, PICKUP_MARKER
from .match import HoleOutcome, HoleWinner, Match, MatchFormat, MatchResult, Side
from .player import TourPlayer
from .round import Round, order_rounds
from .round_player import Participation, RoundPlayer
from .snapshot import ScoreEntry, TourSnapshot
from .tour import Tour

__all__ = [
    "BaseTourModel",
    "CourseTee",
    "Group",
    "GroupKind",
    "Hole",
    "HoleOutcome",
    "HoleScore",
    "HoleWinner",
    "Match",
    "MatchFormat",
    "MatchResult",
    "PICKUP_MARKER",
    "Participation",
    "Round",
    "RoundPlayer",
    "ScoreEntry",
    "Side",
    "Tee",
    "Tour",
    "TourPlayer",
    "TourSnapshot",
    "order_rounds",
]
