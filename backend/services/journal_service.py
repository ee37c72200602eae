"""
journal_service.py — Gratitude journal entries
Entry creation (with the streak update folded into the same transaction and
achievement checks after commit), lookups by id/date range/text/tag/mood,
and field updates. Editing or deleting entries never touches streak counters.
"""

import json
import logging
from datetime import date

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from errors import ConflictError, NotFoundError, TransientStorageError
from models.journal import JournalEntry
from services.achievement_service import AchievementService
from services.streak_service import StreakService, as_date, user_lock

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("gratitude_text", "mood", "tags", "is_private")


def _clamp_limit(limit: int | None) -> int:
    if not limit or limit <= 0:
        return DEFAULT_PAGE_LIMIT
    return min(limit, MAX_PAGE_LIMIT)


class JournalService:
    @staticmethod
    def create(db: Session, user_id: int, data: dict) -> tuple[JournalEntry, list]:
        """Create an entry, advance the streak, then grant any new achievements."""
        entry_date = as_date(data["entry_date"])

        with user_lock(user_id):
            try:
                StreakService._require_user(db, user_id)
                existing = db.query(JournalEntry.id).filter_by(user_id=user_id, entry_date=entry_date).first()
                if existing:
                    raise ConflictError("Entry already exists for this date")

                entry = JournalEntry(
                    user_id=user_id,
                    entry_date=entry_date,
                    gratitude_text=data["gratitude_text"],
                    mood=data.get("mood"),
                    tags=json.dumps(data["tags"]) if data.get("tags") is not None else None,
                    is_private=bool(data.get("is_private", False)),
                )
                db.add(entry)
                db.flush()

                StreakService.apply_entry(db, user_id, entry_date)
                db.commit()
            except IntegrityError as e:
                # Lost a race with another process on the (user, date) key
                db.rollback()
                raise ConflictError("Entry already exists for this date") from e
            except OperationalError as e:
                db.rollback()
                logger.error(f"Entry creation for user {user_id} rolled back: {e}")
                raise TransientStorageError("Could not save entry, please retry") from e
            except Exception:
                db.rollback()
                raise

        db.refresh(entry)
        try:
            new_achievements = AchievementService.check_and_grant(db, user_id)
        except TransientStorageError as e:
            # The entry is saved; missed grants are picked up by the next check
            logger.warning(f"Achievement check after new entry for user {user_id} failed: {e.message}")
            new_achievements = []
        return entry, new_achievements

    @staticmethod
    def get(db: Session, user_id: int, entry_id: int) -> JournalEntry:
        entry = db.query(JournalEntry).filter_by(id=entry_id, user_id=user_id).first()
        if entry is None:
            raise NotFoundError("Journal entry not found")
        return entry

    @staticmethod
    def get_by_date(db: Session, user_id: int, entry_date) -> JournalEntry | None:
        return db.query(JournalEntry).filter_by(user_id=user_id, entry_date=as_date(entry_date)).first()

    @staticmethod
    def list_entries(db: Session, user_id: int, limit: int | None = None, offset: int = 0) -> list[JournalEntry]:
        return (
            db.query(JournalEntry)
            .filter_by(user_id=user_id)
            .order_by(JournalEntry.entry_date.desc())
            .limit(_clamp_limit(limit))
            .offset(max(offset, 0))
            .all()
        )

    @staticmethod
    def in_range(db: Session, user_id: int, start: date, end: date) -> list[JournalEntry]:
        """Entries between two dates, both inclusive, newest first."""
        return (
            db.query(JournalEntry)
            .filter(
                JournalEntry.user_id == user_id,
                JournalEntry.entry_date >= start,
                JournalEntry.entry_date <= end,
            )
            .order_by(JournalEntry.entry_date.desc())
            .all()
        )

    @staticmethod
    def count_entries_in_range(db: Session, user_id: int, start: date, end: date) -> int:
        return (
            db.query(func.count(JournalEntry.id))
            .filter(
                JournalEntry.user_id == user_id,
                JournalEntry.entry_date >= start,
                JournalEntry.entry_date <= end,
            )
            .scalar()
        ) or 0

    @staticmethod
    def search(db: Session, user_id: int, term: str, limit: int | None = None) -> list[JournalEntry]:
        pattern = f"%{term.lower()}%"
        return (
            db.query(JournalEntry)
            .filter(
                JournalEntry.user_id == user_id,
                func.lower(JournalEntry.gratitude_text).like(pattern),
            )
            .order_by(JournalEntry.entry_date.desc())
            .limit(_clamp_limit(limit))
            .all()
        )

    @staticmethod
    def by_tag(db: Session, user_id: int, tag: str, limit: int | None = None) -> list[JournalEntry]:
        # Tags are stored as a JSON array, so match in Python for portability across backends
        entries = (
            db.query(JournalEntry)
            .filter(JournalEntry.user_id == user_id, JournalEntry.tags.isnot(None))
            .order_by(JournalEntry.entry_date.desc())
            .all()
        )
        return [e for e in entries if tag in e.tag_list][:_clamp_limit(limit)]

    @staticmethod
    def by_mood(db: Session, user_id: int, mood: str, limit: int | None = None) -> list[JournalEntry]:
        return (
            db.query(JournalEntry)
            .filter_by(user_id=user_id, mood=mood)
            .order_by(JournalEntry.entry_date.desc())
            .limit(_clamp_limit(limit))
            .all()
        )

    @staticmethod
    def update(db: Session, user_id: int, entry_id: int, data: dict) -> JournalEntry:
        entry = JournalService.get(db, user_id, entry_id)
        try:
            for k, v in data.items():
                if k not in UPDATABLE_FIELDS:
                    continue
                if k == "tags":
                    v = json.dumps(v) if v is not None else None
                setattr(entry, k, v)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise TransientStorageError("Could not update entry, please retry") from e
        except Exception:
            db.rollback()
            raise
        db.refresh(entry)
        return entry

    @staticmethod
    def delete(db: Session, user_id: int, entry_id: int):
        entry = JournalService.get(db, user_id, entry_id)
        try:
            db.delete(entry)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise TransientStorageError("Could not delete entry, please retry") from e
        except Exception:
            db.rollback()
            raise
