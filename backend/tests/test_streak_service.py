"""StreakService against a real SQLite database."""

import threading
from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from database import SessionLocal
from errors import NotFoundError, TransientStorageError
from models.user_streak import UserStreak
from services.journal_service import JournalService
from services.streak_service import StreakService

DAY0 = date(2024, 3, 10)


def day(n: int) -> date:
    return DAY0 + timedelta(days=n)


def test_registration_creates_zero_state_streak(db, make_user):
    user = make_user()
    streak = db.query(UserStreak).filter_by(user_id=user.id).one()
    assert (streak.current_streak, streak.longest_streak, streak.total_entries) == (0, 0, 0)
    assert streak.last_entry_date is None


def test_consecutive_days_build_a_streak(db, make_user):
    user = make_user()
    for n in range(3):
        streak = StreakService.record_entry(db, user.id, day(n))

    assert streak.current_streak == 3
    assert streak.longest_streak == 3
    assert streak.total_entries == 3
    assert streak.last_entry_date == day(2)


def test_gap_resets_current_but_keeps_longest(db, make_user):
    user = make_user()
    for n in range(3):
        StreakService.record_entry(db, user.id, day(n))

    streak = StreakService.record_entry(db, user.id, day(5))

    assert streak.current_streak == 1
    assert streak.longest_streak == 3
    assert streak.total_entries == 4


def test_longest_streak_never_decreases(db, make_user):
    user = make_user()
    previous_longest = 0
    for n in [0, 1, 2, 3, 7, 8, 20, 21, 22, 23, 24, 30]:
        streak = StreakService.record_entry(db, user.id, day(n))
        assert streak.longest_streak >= previous_longest
        assert streak.longest_streak >= streak.current_streak
        previous_longest = streak.longest_streak

    assert streak.longest_streak == 5
    assert streak.total_entries == 12


def test_same_day_entry_does_not_inflate_streak(db, make_user):
    user = make_user()
    StreakService.record_entry(db, user.id, day(0))
    StreakService.record_entry(db, user.id, day(1))

    streak = StreakService.record_entry(db, user.id, day(1))

    assert streak.current_streak == 2
    assert streak.total_entries == 3


def test_backdated_entry_keeps_anchor_date(db, make_user):
    user = make_user()
    StreakService.record_entry(db, user.id, day(5))
    StreakService.record_entry(db, user.id, day(6))

    streak = StreakService.record_entry(db, user.id, day(1))
    assert streak.current_streak == 2
    assert streak.last_entry_date == day(6)
    assert streak.total_entries == 3

    # The streak keeps growing from the latest date, not from the backfill
    streak = StreakService.record_entry(db, user.id, day(7))
    assert streak.current_streak == 3


def test_missing_streak_row_is_created_lazily(db, make_user):
    user = make_user()
    db.query(UserStreak).filter_by(user_id=user.id).delete()
    db.commit()

    streak = StreakService.record_entry(db, user.id, day(0))

    assert streak.current_streak == 1
    assert streak.total_entries == 1


def test_record_entry_for_unknown_user_raises_not_found(db):
    with pytest.raises(NotFoundError):
        StreakService.record_entry(db, 999, day(0))
    assert db.query(UserStreak).count() == 0


def test_failed_commit_rolls_back_every_counter(db, make_user, monkeypatch):
    user = make_user()
    StreakService.record_entry(db, user.id, day(0))

    def broken_commit():
        raise OperationalError("UPDATE user_streaks", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", broken_commit)
    with pytest.raises(TransientStorageError):
        StreakService.record_entry(db, user.id, day(1))

    other = SessionLocal()
    try:
        streak = other.query(UserStreak).filter_by(user_id=user.id).one()
        assert (streak.current_streak, streak.total_entries, streak.last_entry_date) == (1, 1, day(0))
    finally:
        other.close()


def test_concurrent_writers_for_one_user_are_serialized(make_user):
    user = make_user()
    writers = 8
    barrier = threading.Barrier(writers)
    errors = []

    def write():
        session = SessionLocal()
        try:
            barrier.wait()
            StreakService.record_entry(session, user.id, day(0))
        except Exception as e:  # surfaced through the assertion below
            errors.append(e)
        finally:
            session.close()

    threads = [threading.Thread(target=write) for _ in range(writers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    session = SessionLocal()
    try:
        streak = session.query(UserStreak).filter_by(user_id=user.id).one()
        assert streak.total_entries == writers
        assert streak.current_streak == 1
        assert streak.longest_streak == 1
    finally:
        session.close()


def test_get_streak_is_read_only(db, make_user):
    user = make_user()
    db.query(UserStreak).filter_by(user_id=user.id).delete()
    db.commit()

    streak = StreakService.get_streak(db, user.id)

    assert streak.current_streak == 0
    assert db.query(UserStreak).count() == 0


def test_get_streak_unknown_user(db):
    with pytest.raises(NotFoundError):
        StreakService.get_streak(db, 42)


def test_use_freeze_only_counts(db, make_user):
    user = make_user()
    StreakService.record_entry(db, user.id, day(0))

    streak = StreakService.use_freeze(db, user.id)
    streak = StreakService.use_freeze(db, user.id)

    assert streak.streak_freeze_count == 2
    assert streak.current_streak == 1


def test_stats_count_this_week_and_month(db, make_user):
    user = make_user()
    for d in [date(2024, 4, 30), date(2024, 5, 10), date(2024, 5, 12), date(2024, 5, 15)]:
        JournalService.create(db, user.id, {"entry_date": d, "gratitude_text": "thanks"})

    stats = StreakService.get_stats(db, user.id, today=date(2024, 5, 15))

    assert stats == {
        "total_entries": 4,
        "current_streak": 1,
        "longest_streak": 1,
        "achievements_earned": 0,
        "entries_this_week": 2,
        "entries_this_month": 3,
    }


def test_stats_unknown_user(db):
    with pytest.raises(NotFoundError):
        StreakService.get_stats(db, 7)
