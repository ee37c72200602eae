from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey
from database import Base


class UserStreak(Base):
    """One row per user. Derived counters maintained by StreakService."""

    __tablename__ = "user_streaks"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    current_streak = Column(Integer, default=0, nullable=False)
    longest_streak = Column(Integer, default=0, nullable=False)
    total_entries = Column(Integer, default=0, nullable=False)
    last_entry_date = Column(Date, nullable=True)
    streak_freeze_count = Column(Integer, default=0, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return (
            f"<UserStreak user_id={self.user_id} current={self.current_streak} "
            f"longest={self.longest_streak} total={self.total_entries} last={self.last_entry_date}>"
        )
