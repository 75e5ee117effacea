from .score_repo import ScoreRepository
from .venue_repo import VenueContextRepository

__all__ = ["ScoreRepository", "VenueContextRepository"]
