import random

from sqlalchemy.orm import Session

from errors import NotFoundError
from models.daily_prompt import DailyPrompt


class PromptService:
    @staticmethod
    def create(db: Session, prompt_text: str, category: str | None = None) -> DailyPrompt:
        prompt = DailyPrompt(prompt_text=prompt_text, category=category)
        db.add(prompt)
        db.commit()
        db.refresh(prompt)
        return prompt

    @staticmethod
    def random(db: Session) -> DailyPrompt:
        ids = [r[0] for r in db.query(DailyPrompt.id).all()]
        if not ids:
            raise NotFoundError("Prompt not found")
        return db.get(DailyPrompt, random.choice(ids))

    @staticmethod
    def by_category(db: Session, category: str) -> list[DailyPrompt]:
        prompts = db.query(DailyPrompt).filter_by(category=category).all()
        random.shuffle(prompts)
        return prompts

    @staticmethod
    def all(db: Session) -> list[DailyPrompt]:
        return db.query(DailyPrompt).order_by(DailyPrompt.created_at.desc(), DailyPrompt.id.desc()).all()

    @staticmethod
    def delete(db: Session, prompt_id: int):
        prompt = db.get(DailyPrompt, prompt_id)
        if prompt is None:
            raise NotFoundError("Prompt not found")
        db.delete(prompt)
        db.commit()
