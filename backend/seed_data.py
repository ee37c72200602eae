"""
seed_data.py — Default achievement catalog and journaling prompts
Inserted by init_db() when the tables are empty.
"""

import logging

from sqlalchemy.orm import Session

from models.achievement import Achievement, RequirementKind
from models.daily_prompt import DailyPrompt

logger = logging.getLogger(__name__)

DEFAULT_ACHIEVEMENTS = [
    # Streak achievements
    {"name": "Getting Started", "description": "Journal 3 days in a row", "icon": "🌱",
     "requirement_type": RequirementKind.STREAK, "requirement_value": 3},
    {"name": "Week Warrior", "description": "Keep a 7-day streak", "icon": "🔥",
     "requirement_type": RequirementKind.STREAK, "requirement_value": 7},
    {"name": "Month Master", "description": "Keep a 30-day streak", "icon": "🏆",
     "requirement_type": RequirementKind.STREAK, "requirement_value": 30},
    {"name": "Centurion", "description": "Keep a 100-day streak", "icon": "👑",
     "requirement_type": RequirementKind.STREAK, "requirement_value": 100},
    # Total entry achievements
    {"name": "First Entry", "description": "Write your first gratitude entry", "icon": "✍️",
     "requirement_type": RequirementKind.TOTAL_ENTRIES, "requirement_value": 1},
    {"name": "Ten Thanks", "description": "Write 10 entries", "icon": "📓",
     "requirement_type": RequirementKind.TOTAL_ENTRIES, "requirement_value": 10},
    {"name": "Fifty Reflections", "description": "Write 50 entries", "icon": "🌻",
     "requirement_type": RequirementKind.TOTAL_ENTRIES, "requirement_value": 50},
    {"name": "Gratitude Garden", "description": "Write 100 entries", "icon": "🌳",
     "requirement_type": RequirementKind.TOTAL_ENTRIES, "requirement_value": 100},
]

DEFAULT_PROMPTS = [
    ("What made you smile today?", "joy"),
    ("Who is someone you are thankful for, and why?", "people"),
    ("What is a small comfort you often take for granted?", "everyday"),
    ("What challenge taught you something this week?", "growth"),
    ("Describe a place that makes you feel calm.", "places"),
    ("What is something your body allowed you to do today?", "health"),
]


def seed_defaults(db: Session):
    if db.query(Achievement.id).first() is None:
        db.add_all(Achievement(**a) for a in DEFAULT_ACHIEVEMENTS)
        logger.info(f"Seeded {len(DEFAULT_ACHIEVEMENTS)} achievements.")
    if db.query(DailyPrompt.id).first() is None:
        db.add_all(DailyPrompt(prompt_text=text, category=category) for text, category in DEFAULT_PROMPTS)
        logger.info(f"Seeded {len(DEFAULT_PROMPTS)} journaling prompts.")
    db.commit()
