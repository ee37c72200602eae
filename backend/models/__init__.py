# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.journal import JournalEntry
from models.user_streak import UserStreak
from models.achievement import Achievement, RequirementKind
from models.user_achievement import UserAchievement
from models.daily_prompt import DailyPrompt

__all__ = [
    "User",
    "JournalEntry",
    "UserStreak",
    "Achievement",
    "RequirementKind",
    "UserAchievement",
    "DailyPrompt",
]
