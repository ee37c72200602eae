"""Entry creation flow and entry queries."""

from datetime import date, datetime

import pytest

from errors import ConflictError, NotFoundError, TransientStorageError
from models.achievement import RequirementKind
from models.journal import JournalEntry
from models.user_streak import UserStreak
from services.achievement_service import AchievementService
from services.journal_service import JournalService


def entry(d: date, text: str = "grateful for tea", **extra) -> dict:
    return {"entry_date": d, "gratitude_text": text, **extra}


def test_create_updates_streak_and_returns_new_achievements(db, make_user, make_achievement):
    user = make_user()
    make_achievement("First Entry", RequirementKind.TOTAL_ENTRIES, 1)

    created, new_achievements = JournalService.create(
        db, user.id, entry(date(2024, 6, 1), mood="happy", tags=["family", "food"], is_private=True)
    )

    assert created.id is not None
    assert created.tag_list == ["family", "food"]
    assert created.is_private is True
    assert [a.name for a in new_achievements] == ["First Entry"]
    streak = db.query(UserStreak).filter_by(user_id=user.id).one()
    assert (streak.current_streak, streak.total_entries) == (1, 1)


def test_saved_entry_survives_a_failed_achievement_check(db, make_user, make_achievement, monkeypatch):
    user = make_user()
    make_achievement("First Entry", RequirementKind.TOTAL_ENTRIES, 1)

    def busy(db, user_id):
        raise TransientStorageError("Could not record achievements, please retry")

    with monkeypatch.context() as m:
        m.setattr(AchievementService, "check_and_grant", staticmethod(busy))
        created, new_achievements = JournalService.create(db, user.id, entry(date(2024, 6, 1)))

    assert new_achievements == []
    assert JournalService.get(db, user.id, created.id).gratitude_text == "grateful for tea"
    assert db.query(UserStreak).filter_by(user_id=user.id).one().total_entries == 1
    # The next check grants what the failed one missed
    assert [a.name for a in AchievementService.check_and_grant(db, user.id)] == ["First Entry"]


def test_create_normalizes_datetime_to_date(db, make_user):
    user = make_user()
    created, _ = JournalService.create(db, user.id, entry(datetime(2024, 6, 1, 21, 30)))
    assert created.entry_date == date(2024, 6, 1)


def test_second_entry_for_same_day_conflicts_and_leaves_counters(db, make_user):
    user = make_user()
    JournalService.create(db, user.id, entry(date(2024, 6, 1)))

    with pytest.raises(ConflictError):
        JournalService.create(db, user.id, entry(date(2024, 6, 1), "again"))

    assert db.query(JournalEntry).count() == 1
    assert db.query(UserStreak).filter_by(user_id=user.id).one().total_entries == 1


def test_create_for_unknown_user(db):
    with pytest.raises(NotFoundError):
        JournalService.create(db, 404, entry(date(2024, 6, 1)))
    assert db.query(JournalEntry).count() == 0


def test_entries_are_private_to_their_owner(db, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    created, _ = JournalService.create(db, alice.id, entry(date(2024, 6, 1)))

    with pytest.raises(NotFoundError):
        JournalService.get(db, bob.id, created.id)
    with pytest.raises(NotFoundError):
        JournalService.delete(db, bob.id, created.id)


def test_update_touches_only_given_fields(db, make_user):
    user = make_user()
    created, _ = JournalService.create(db, user.id, entry(date(2024, 6, 1), mood="calm", tags=["a"]))

    updated = JournalService.update(db, user.id, created.id, {"tags": ["b", "c"], "user_id": 999})

    assert updated.tag_list == ["b", "c"]
    assert updated.mood == "calm"
    assert updated.user_id == user.id


def test_delete_keeps_total_entries(db, make_user):
    user = make_user()
    created, _ = JournalService.create(db, user.id, entry(date(2024, 6, 1)))

    JournalService.delete(db, user.id, created.id)

    assert db.query(JournalEntry).count() == 0
    assert db.query(UserStreak).filter_by(user_id=user.id).one().total_entries == 1


def test_queries(db, make_user):
    user = make_user()
    JournalService.create(db, user.id, entry(date(2024, 6, 1), "Sunny walk in the park", mood="happy", tags=["outdoors"]))
    JournalService.create(db, user.id, entry(date(2024, 6, 2), "Dinner with family", mood="content", tags=["family"]))
    JournalService.create(db, user.id, entry(date(2024, 6, 5), "A PARK picnic", mood="happy", tags=["outdoors", "food"]))

    assert [e.entry_date.day for e in JournalService.list_entries(db, user.id)] == [5, 2, 1]
    assert [e.entry_date.day for e in JournalService.list_entries(db, user.id, limit=1, offset=1)] == [2]
    assert [e.entry_date.day for e in JournalService.in_range(db, user.id, date(2024, 6, 2), date(2024, 6, 5))] == [5, 2]
    assert [e.entry_date.day for e in JournalService.search(db, user.id, "park")] == [5, 1]
    assert [e.entry_date.day for e in JournalService.by_tag(db, user.id, "outdoors")] == [5, 1]
    assert [e.entry_date.day for e in JournalService.by_mood(db, user.id, "content")] == [2]
    assert JournalService.count_entries_in_range(db, user.id, date(2024, 6, 1), date(2024, 6, 2)) == 2
