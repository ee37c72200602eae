from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime
from database import Base


class DailyPrompt(Base):
    __tablename__ = "daily_prompts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    prompt_text = Column(Text, nullable=False)
    category = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
