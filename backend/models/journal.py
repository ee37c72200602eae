import json
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, ForeignKey, UniqueConstraint
from database import Base


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    entry_date = Column(Date, nullable=False)
    gratitude_text = Column(Text, nullable=False)
    mood = Column(String(50), nullable=True)
    tags = Column(Text, nullable=True)  # JSON array of strings
    is_private = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "entry_date", name="uq_journal_user_date"),
    )

    @property
    def tag_list(self) -> list[str]:
        return json.loads(self.tags) if self.tags else []
