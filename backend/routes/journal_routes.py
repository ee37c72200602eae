from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from schemas import EntryCreatedOut, EntryOut
from services.journal_service import JournalService

router = APIRouter(prefix="/api/v1/journal", tags=["Journal"])


class JournalEntryCreate(BaseModel):
    entry_date: date
    gratitude_text: str = Field(min_length=1)
    mood: Optional[str] = None
    tags: Optional[List[str]] = None
    is_private: bool = False


class JournalEntryUpdate(BaseModel):
    gratitude_text: Optional[str] = Field(default=None, min_length=1)
    mood: Optional[str] = None
    tags: Optional[List[str]] = None
    is_private: Optional[bool] = None

    @field_validator("gratitude_text", "is_private")
    @classmethod
    def not_null(cls, v, info):
        # Omit the field to keep it; null is not a value these columns accept
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


@router.post("/entries", status_code=201, response_model=EntryCreatedOut)
def create_entry(body: JournalEntryCreate, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Save today's (or a past day's) entry. Returns any achievements it unlocked."""
    entry, new_achievements = JournalService.create(db, user_id, body.model_dump())
    return {"entry": entry, "new_achievements": new_achievements}


@router.get("/entries", response_model=List[EntryOut])
def list_entries(
    limit: Optional[int] = None,
    offset: int = 0,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return JournalService.list_entries(db, user_id, limit, offset)


@router.get("/entries/range", response_model=List[EntryOut])
def entries_in_range(
    start_date: date,
    end_date: date,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return JournalService.in_range(db, user_id, start_date, end_date)


@router.get("/entries/search", response_model=List[EntryOut])
def search_entries(
    q: str = Query(min_length=1),
    limit: Optional[int] = None,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return JournalService.search(db, user_id, q, limit)


@router.get("/entries/tag/{tag}", response_model=List[EntryOut])
def entries_by_tag(tag: str, limit: Optional[int] = None,
                   user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return JournalService.by_tag(db, user_id, tag, limit)


@router.get("/entries/mood/{mood}", response_model=List[EntryOut])
def entries_by_mood(mood: str, limit: Optional[int] = None,
                    user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return JournalService.by_mood(db, user_id, mood, limit)


@router.get("/entries/{entry_id}", response_model=EntryOut)
def get_entry(entry_id: int, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return JournalService.get(db, user_id, entry_id)


@router.put("/entries/{entry_id}", response_model=EntryOut)
def update_entry(entry_id: int, body: JournalEntryUpdate,
                 user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return JournalService.update(db, user_id, entry_id, body.model_dump(exclude_unset=True))


@router.delete("/entries/{entry_id}", status_code=204)
def delete_entry(entry_id: int, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    JournalService.delete(db, user_id, entry_id)
    return Response(status_code=204)
