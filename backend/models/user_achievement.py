from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, ForeignKey
from database import Base


class UserAchievement(Base):
    __tablename__ = "user_achievements"

    # Composite key makes a second grant for the same pair a no-op
    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    achievement_id = Column(Integer, ForeignKey("achievements.id"), primary_key=True)
    earned_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
