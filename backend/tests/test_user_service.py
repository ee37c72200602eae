"""Account changes against a real SQLite database."""

import pytest
from sqlalchemy.exc import IntegrityError

from errors import ConflictError
from services.user_service import UserService


def test_update_email(db, make_user):
    user = make_user()
    assert UserService.update_email(db, user.id, "new@example.com").email == "new@example.com"


def test_update_email_to_a_taken_address_conflicts(db, make_user):
    make_user("alice")
    bob = make_user("bob")

    with pytest.raises(ConflictError):
        UserService.update_email(db, bob.id, "alice@example.com")


def test_email_taken_during_commit_conflicts_and_rolls_back(db, make_user, monkeypatch):
    bob = make_user("bob")

    def lost_race():
        raise IntegrityError("UPDATE users", {}, Exception("UNIQUE constraint failed: users.email"))

    with monkeypatch.context() as m:
        m.setattr(db, "commit", lost_race)
        with pytest.raises(ConflictError, match="Email already exists"):
            UserService.update_email(db, bob.id, "carol@example.com")

    assert UserService.get(db, bob.id).email == "bob@example.com"
