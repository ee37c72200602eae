from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from schemas import StatsOut, StreakOut, UserOut
from services.streak_service import StreakService
from services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


class EmailUpdate(BaseModel):
    email: str = Field(min_length=3, max_length=255)


class PasswordUpdate(BaseModel):
    password: str = Field(min_length=6)


@router.get("/me", response_model=UserOut)
def get_me(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return UserService.get(db, user_id)


@router.put("/me/email", response_model=UserOut)
def update_email(body: EmailUpdate, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return UserService.update_email(db, user_id, body.email)


@router.put("/me/password")
def update_password(body: PasswordUpdate, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    UserService.update_password(db, user_id, body.password)
    return {"message": "Password updated successfully"}


@router.delete("/me", status_code=204)
def delete_me(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    UserService.delete(db, user_id)
    return Response(status_code=204)


@router.get("/me/stats", response_model=StatsOut)
def get_stats(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Streak counters plus this week's and this month's entry counts."""
    return StreakService.get_stats(db, user_id)


@router.get("/me/streak", response_model=StreakOut)
def get_streak(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return StreakService.get_streak(db, user_id)


@router.post("/me/streak/freeze", response_model=StreakOut)
def use_streak_freeze(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return StreakService.use_freeze(db, user_id)
