from leaderboard.models.base import Base
from leaderboard.models.game import Game
from leaderboard.models.score import Score
from leaderboard.models.venue_settings import VENUE_SETTINGS_ID, VenueSettings

__all__ = [
    "Base",
    "Game",
    "Score",
    "VenueSettings",
    "VENUE_SETTINGS_ID",
]
