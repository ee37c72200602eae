from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from schemas import PromptOut
from services.prompt_service import PromptService

router = APIRouter(prefix="/api/v1/prompts", tags=["Prompts"])


class PromptCreate(BaseModel):
    prompt_text: str = Field(min_length=1)
    category: Optional[str] = None


@router.post("", status_code=201, response_model=PromptOut)
def create_prompt(body: PromptCreate, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return PromptService.create(db, body.prompt_text, body.category)


@router.get("", response_model=List[PromptOut])
def list_prompts(db: Session = Depends(get_db)):
    return PromptService.all(db)


@router.get("/random", response_model=PromptOut)
def random_prompt(db: Session = Depends(get_db)):
    return PromptService.random(db)


@router.get("/category/{category}", response_model=List[PromptOut])
def prompts_by_category(category: str, db: Session = Depends(get_db)):
    return PromptService.by_category(db, category)


@router.delete("/{prompt_id}", status_code=204)
def delete_prompt(prompt_id: int, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    PromptService.delete(db, prompt_id)
    return Response(status_code=204)
