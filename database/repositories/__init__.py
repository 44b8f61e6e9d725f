from .tour_repo import TourRepositoryDB
from .round_player_repo import RoundPlayerRepositoryDB

__all__ = ["TourRepositoryDB", "RoundPlayerRepositoryDB"]
