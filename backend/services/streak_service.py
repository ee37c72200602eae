"""
streak_service.py — Journal streaks & aggregate counters
Advances each user's current/longest streak and total entry count as entries
are recorded, and builds the read-only stats view (week/month activity).
"""

import logging
import threading
import weakref
from contextlib import contextmanager
from datetime import date, datetime, timezone, timedelta

from sqlalchemy import func
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from config import WEEK_STARTS_ON
from database import insert_ignore
from errors import NotFoundError, TransientStorageError
from models.user import User
from models.user_streak import UserStreak
from models.user_achievement import UserAchievement

logger = logging.getLogger(__name__)

# Entries live only while some thread holds or waits on the lock
_user_locks = weakref.WeakValueDictionary()
_user_locks_guard = threading.Lock()


@contextmanager
def user_lock(user_id: int):
    """Serialize streak writes for one user inside this process.

    SELECT ... FOR UPDATE orders writers across processes on PostgreSQL;
    SQLite ignores it, so writers in one process also queue here.
    Different users never share a lock.
    """
    with _user_locks_guard:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _user_locks[user_id] = threading.Lock()
    with lock:
        yield


def as_date(value) -> date:
    """Drop the time-of-day part, if any."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(earlier, later) -> int:
    return (as_date(later) - as_date(earlier)).days


def advance_streak(current: int, last_entry_date, entry_date) -> int:
    """Streak length after an entry on `entry_date`.

    Next day extends the streak, a gap restarts it at 1. Same-day and
    backdated entries leave it unchanged.
    """
    if last_entry_date is None:
        return 1
    diff = days_between(last_entry_date, entry_date)
    if diff == 1:
        return current + 1
    if diff > 1:
        return 1
    return current


def week_bounds(today: date, week_starts_on: int = WEEK_STARTS_ON) -> tuple[date, date]:
    start = today - timedelta(days=(today.weekday() - week_starts_on) % 7)
    return start, start + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    start = today.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


class StreakService:
    @staticmethod
    def _require_user(db: Session, user_id: int):
        if db.get(User, user_id) is None:
            raise NotFoundError("User not found")

    @staticmethod
    def initialize(db: Session, user_id: int) -> bool:
        """Create the zero-state row if missing. Does not commit."""
        return insert_ignore(
            db, UserStreak,
            user_id=user_id,
            current_streak=0,
            longest_streak=0,
            total_entries=0,
            streak_freeze_count=0,
        )

    @staticmethod
    def _lock_row(db: Session, user_id: int) -> UserStreak:
        """Load the streak row with a row lock, creating it lazily."""
        query = db.query(UserStreak).filter_by(user_id=user_id).with_for_update().populate_existing()
        streak = query.first()
        if streak is None:
            StreakService._require_user(db, user_id)
            StreakService.initialize(db, user_id)
            streak = query.first()
        return streak

    @staticmethod
    def apply_entry(db: Session, user_id: int, entry_date) -> UserStreak:
        """Locked read-modify-write for one new entry. The caller commits.

        Callers must hold user_lock(user_id) for the whole transaction.
        """
        streak = StreakService._lock_row(db, user_id)
        entry_day = as_date(entry_date)

        streak.current_streak = advance_streak(streak.current_streak, streak.last_entry_date, entry_day)
        streak.longest_streak = max(streak.longest_streak, streak.current_streak)
        streak.total_entries += 1
        # A backdated entry must not move the anchor backwards
        if streak.last_entry_date is None or entry_day > streak.last_entry_date:
            streak.last_entry_date = entry_day
        db.flush()

        logger.debug("Streak updated for user %s: %r", user_id, streak)
        return streak

    @staticmethod
    def record_entry(db: Session, user_id: int, entry_date) -> UserStreak:
        """Apply one entry to the user's streak in its own transaction."""
        with user_lock(user_id):
            try:
                streak = StreakService.apply_entry(db, user_id, entry_date)
                db.commit()
            except OperationalError as e:
                db.rollback()
                logger.error(f"Streak update for user {user_id} rolled back: {e}")
                raise TransientStorageError("Could not update streak, please retry") from e
            except Exception:
                db.rollback()
                raise
        db.refresh(streak)
        return streak

    @staticmethod
    def get_streak(db: Session, user_id: int) -> UserStreak:
        """Read-only. A user without a row yet reads as zero-state."""
        StreakService._require_user(db, user_id)
        streak = db.query(UserStreak).filter_by(user_id=user_id).first()
        if streak is None:
            return UserStreak(
                user_id=user_id,
                current_streak=0,
                longest_streak=0,
                total_entries=0,
                last_entry_date=None,
                streak_freeze_count=0,
            )
        return streak

    @staticmethod
    def use_freeze(db: Session, user_id: int) -> UserStreak:
        with user_lock(user_id):
            try:
                streak = StreakService._lock_row(db, user_id)
                streak.streak_freeze_count += 1
                db.commit()
            except OperationalError as e:
                db.rollback()
                logger.error(f"Streak freeze for user {user_id} rolled back: {e}")
                raise TransientStorageError("Could not use streak freeze, please retry") from e
            except Exception:
                db.rollback()
                raise
        db.refresh(streak)
        return streak

    @staticmethod
    def get_stats(db: Session, user_id: int, today: date | None = None) -> dict:
        from services.journal_service import JournalService

        streak = StreakService.get_streak(db, user_id)
        today = today or datetime.now(timezone.utc).date()
        week_start, week_end = week_bounds(today)
        month_start, month_end = month_bounds(today)

        earned = (
            db.query(func.count())
            .select_from(UserAchievement)
            .filter(UserAchievement.user_id == user_id)
            .scalar()
        )

        return {
            "total_entries": streak.total_entries,
            "current_streak": streak.current_streak,
            "longest_streak": streak.longest_streak,
            "achievements_earned": earned or 0,
            "entries_this_week": JournalService.count_entries_in_range(db, user_id, week_start, week_end),
            "entries_this_month": JournalService.count_entries_in_range(db, user_id, month_start, month_end),
        }
