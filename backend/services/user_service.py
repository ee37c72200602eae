"""
user_service.py — Accounts
Registration (with the streak row created alongside the user), password
login, profile updates and account deletion.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth import hash_password, verify_password
from errors import ConflictError, NotFoundError
from models.journal import JournalEntry
from models.user import User
from models.user_achievement import UserAchievement
from models.user_streak import UserStreak
from services.streak_service import StreakService

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def create(db: Session, username: str, email: str, password: str) -> User:
        if db.query(User.id).filter_by(username=username).first():
            raise ConflictError("Username already exists")
        if db.query(User.id).filter_by(email=email).first():
            raise ConflictError("Email already exists")

        try:
            user = User(username=username, email=email, hashed_password=hash_password(password))
            db.add(user)
            db.flush()
            StreakService.initialize(db, user.id)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("User already exists") from e
        except Exception:
            db.rollback()
            raise

        db.refresh(user)
        logger.info(f"Registered user {user.id} ({username})")
        return user

    @staticmethod
    def get(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> User | None:
        user = db.query(User).filter_by(username=username).first()
        if user is None or not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    def update_email(db: Session, user_id: int, email: str) -> User:
        user = UserService.get(db, user_id)
        clash = db.query(User.id).filter(User.email == email, User.id != user_id).first()
        if clash:
            raise ConflictError("Email already exists")
        try:
            user.email = email
            db.commit()
        except IntegrityError as e:
            # Another account took the address between the check and the commit
            db.rollback()
            raise ConflictError("Email already exists") from e
        except Exception:
            db.rollback()
            raise
        db.refresh(user)
        return user

    @staticmethod
    def update_password(db: Session, user_id: int, password: str):
        user = UserService.get(db, user_id)
        user.hashed_password = hash_password(password)
        db.commit()

    @staticmethod
    def delete(db: Session, user_id: int):
        """Remove the user together with their entries, streak and grants."""
        user = UserService.get(db, user_id)
        try:
            db.query(UserAchievement).filter_by(user_id=user_id).delete()
            db.query(UserStreak).filter_by(user_id=user_id).delete()
            db.query(JournalEntry).filter_by(user_id=user_id).delete()
            db.delete(user)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Deleted user {user_id}")
