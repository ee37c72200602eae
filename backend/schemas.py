"""
Response schemas shared by the routers. Request bodies live next to the
route that accepts them.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.achievement import RequirementKind


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class UserOut(ORMModel):
    id: int
    username: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EntryOut(ORMModel):
    id: int
    user_id: int
    entry_date: date
    gratitude_text: str
    mood: Optional[str] = None
    tags: List[str] = Field(default_factory=list, validation_alias="tag_list")
    is_private: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AchievementOut(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    requirement_type: RequirementKind
    requirement_value: int


class EarnedAchievementOut(BaseModel):
    achievement: AchievementOut
    earned_at: datetime


class ProgressOut(BaseModel):
    achievement: AchievementOut
    earned: bool
    progress: int
    current_value: int
    required_value: int


class EntryCreatedOut(BaseModel):
    entry: EntryOut
    new_achievements: List[AchievementOut]


class StreakOut(ORMModel):
    user_id: int
    current_streak: int
    longest_streak: int
    total_entries: int
    last_entry_date: Optional[date] = None
    streak_freeze_count: int


class StatsOut(BaseModel):
    total_entries: int
    current_streak: int
    longest_streak: int
    achievements_earned: int
    entries_this_week: int
    entries_this_month: int


class PromptOut(ORMModel):
    id: int
    prompt_text: str
    category: Optional[str] = None
    created_at: Optional[datetime] = None
