from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from schemas import AchievementOut, EarnedAchievementOut, ProgressOut
from services.achievement_service import AchievementService

router = APIRouter(prefix="/api/v1/achievements", tags=["Achievements"])


@router.get("", response_model=List[AchievementOut])
def list_achievements(db: Session = Depends(get_db)):
    return AchievementService.list_catalog(db)


@router.get("/me", response_model=List[EarnedAchievementOut])
def my_achievements(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return AchievementService.list_earned(db, user_id)


@router.get("/me/progress", response_model=List[ProgressOut])
def my_progress(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return AchievementService.get_progress(db, user_id)


@router.post("/me/check", response_model=List[AchievementOut])
def check_achievements(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Grant anything the current counters qualify for. Returns only new grants."""
    return AchievementService.check_and_grant(db, user_id)


@router.get("/{achievement_id}", response_model=AchievementOut)
def get_achievement(achievement_id: int, db: Session = Depends(get_db)):
    return AchievementService.get_by_id(db, achievement_id)
