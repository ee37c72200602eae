from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from auth import create_token
from database import get_db
from schemas import UserOut
from services.user_service import UserService

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# ── Pydantic schemas ──────────────────────────────────────────────
class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6)


class AuthRequest(BaseModel):
    username: str
    password: str


def _token_response(user) -> dict:
    token = create_token(user.id, user.username)
    return {"token": token, "user": UserOut.model_validate(user)}


# ── Routes ────────────────────────────────────────────────────────
@router.post("/register", status_code=201)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return a bearer token for it."""
    user = UserService.create(db, body.username, body.email, body.password)
    return _token_response(user)


@router.post("/login")
def login(body: AuthRequest, db: Session = Depends(get_db)):
    user = UserService.authenticate(db, body.username, body.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _token_response(user)
