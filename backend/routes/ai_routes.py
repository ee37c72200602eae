from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from services.insight_service import InsightService
from services.journal_service import JournalService
from services.llm_router import get_llm_router

router = APIRouter(prefix="/api/v1/ai", tags=["AI"])


# ── Pydantic schemas ──────────────────────────────────────────────
class WeeklyInsightRequest(BaseModel):
    reflection_text: str = Field(min_length=1, alias="reflectionText")

    model_config = {"populate_by_name": True}


class EntrySnippet(BaseModel):
    entry_date: str
    gratitude_text: Optional[str] = None
    mood: Optional[str] = None


class AnalyzeRequest(BaseModel):
    # When omitted, the user's most recent entries are analyzed
    entries: Optional[List[EntrySnippet]] = None
    limit: int = Field(default=14, ge=1, le=100)


# ── Routes ────────────────────────────────────────────────────────
@router.post("/weekly-insight")
async def weekly_insight(body: WeeklyInsightRequest, user_id: int = Depends(get_current_user)):
    insight = await InsightService.weekly_insight(get_llm_router(), body.reflection_text)
    return {"insight": insight}


@router.post("/analyze")
async def analyze_entries(
    body: AnalyzeRequest,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Short pattern-spotting insight over a set of entries."""
    if body.entries is not None:
        entries = [e.model_dump() for e in body.entries]
    else:
        rows = await run_in_threadpool(JournalService.list_entries, db, user_id, body.limit)
        entries = [
            {"entry_date": str(r.entry_date), "gratitude_text": r.gratitude_text, "mood": r.mood}
            for r in rows
        ]
    if not entries:
        raise HTTPException(status_code=400, detail="No entries provided for analysis")

    insight = await InsightService.analyze_entries(get_llm_router(), entries)
    return {"insight": insight}
