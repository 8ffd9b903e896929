# Models package: importing it registers every table with Base.metadata
from app.models.user import User
from app.models.journal import JournalEntry
from app.models.mood import MoodEntry
from app.models.gratitude import GratitudeEntry
from app.models.friend import FriendRequest
from app.models.support import SupportInteraction
from app.models.achievement import Achievement

__all__ = [
    "User",
    "JournalEntry",
    "MoodEntry",
    "GratitudeEntry",
    "FriendRequest",
    "SupportInteraction",
    "Achievement",
]
