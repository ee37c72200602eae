"""
achievement_service.py — Achievement evaluation & grants
Checks the achievement catalog against a user's streak counters, records
each grant exactly once, and reports per-achievement progress.
"""

import logging
import math

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from database import insert_ignore
from errors import InvalidCatalogDataError, NotFoundError, TransientStorageError
from models.achievement import Achievement, RequirementKind
from models.user_achievement import UserAchievement
from services.streak_service import StreakService

logger = logging.getLogger(__name__)


def current_value_for(kind: RequirementKind, stats: dict) -> int:
    if kind == RequirementKind.STREAK:
        return stats.get("current_streak", 0)
    if kind == RequirementKind.TOTAL_ENTRIES:
        return stats.get("total_entries", 0)
    return 0


def qualifies(achievement: Achievement, stats: dict) -> bool:
    """Whether `stats` meet the achievement's threshold. Unknown kinds never qualify."""
    if achievement.requirement_value is None or achievement.requirement_value <= 0:
        raise InvalidCatalogDataError(
            f"Achievement {achievement.name!r} has non-positive threshold {achievement.requirement_value}"
        )
    if achievement.requirement_type not in (RequirementKind.STREAK, RequirementKind.TOTAL_ENTRIES):
        return False
    return current_value_for(achievement.requirement_type, stats) >= achievement.requirement_value


def progress_percent(current: int, required: int) -> int:
    """Rounded percentage capped at 100. A non-positive threshold counts as met."""
    if required is None or required <= 0:
        return 100
    # Half-up rounding, so 12.5% reports as 13
    return min(100, math.floor(100 * current / required + 0.5))


class AchievementService:
    @staticmethod
    def list_catalog(db: Session) -> list[Achievement]:
        return (
            db.query(Achievement)
            .order_by(Achievement.requirement_value.asc(), Achievement.id.asc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, achievement_id: int) -> Achievement:
        achievement = db.get(Achievement, achievement_id)
        if achievement is None:
            raise NotFoundError("Achievement not found")
        return achievement

    @staticmethod
    def earned_ids(db: Session, user_id: int) -> set[int]:
        rows = db.query(UserAchievement.achievement_id).filter_by(user_id=user_id).all()
        return {r[0] for r in rows}

    @staticmethod
    def list_earned(db: Session, user_id: int) -> list[dict]:
        """Earned achievements, most recent first."""
        StreakService._require_user(db, user_id)
        rows = (
            db.query(Achievement, UserAchievement.earned_at)
            .join(UserAchievement, UserAchievement.achievement_id == Achievement.id)
            .filter(UserAchievement.user_id == user_id)
            .order_by(UserAchievement.earned_at.desc(), Achievement.id.desc())
            .all()
        )
        return [{"achievement": a, "earned_at": earned_at} for a, earned_at in rows]

    @staticmethod
    def _stats(db: Session, user_id: int) -> dict:
        streak = StreakService.get_streak(db, user_id)
        return {"current_streak": streak.current_streak, "total_entries": streak.total_entries}

    @staticmethod
    def check_and_grant(db: Session, user_id: int) -> list[Achievement]:
        """Grant every newly qualifying achievement. Returns only this call's grants."""
        stats = AchievementService._stats(db, user_id)
        catalog = AchievementService.list_catalog(db)
        earned = AchievementService.earned_ids(db, user_id)

        newly_granted = []
        try:
            for achievement in catalog:
                if achievement.id in earned:
                    continue
                try:
                    if not qualifies(achievement, stats):
                        continue
                except InvalidCatalogDataError as e:
                    logger.warning(f"Skipping achievement {achievement.id}: {e.message}")
                    continue

                # A concurrent evaluation may have granted it first
                if insert_ignore(db, UserAchievement, user_id=user_id, achievement_id=achievement.id):
                    newly_granted.append(achievement)
            db.commit()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Achievement grants for user {user_id} rolled back: {e}")
            raise TransientStorageError("Could not record achievements, please retry") from e
        except Exception:
            db.rollback()
            raise

        for achievement in newly_granted:
            logger.info(f"User {user_id} earned achievement {achievement.name!r}")
        return newly_granted

    @staticmethod
    def get_progress(db: Session, user_id: int) -> list[dict]:
        """Read-only progress for every catalog achievement."""
        stats = AchievementService._stats(db, user_id)
        catalog = AchievementService.list_catalog(db)
        earned = AchievementService.earned_ids(db, user_id)

        result = []
        for achievement in catalog:
            current = current_value_for(achievement.requirement_type, stats)
            result.append({
                "achievement": achievement,
                "earned": achievement.id in earned,
                "progress": progress_percent(current, achievement.requirement_value),
                "current_value": current,
                "required_value": achievement.requirement_value,
            })
        return result
