"""
insight_service.py — AI reflections
Builds the coaching prompts for weekly reflections and entry-pattern
analysis and sends them through the LLM router.
"""

import logging

from errors import AIUnavailableError

logger = logging.getLogger(__name__)

WEEKLY_SYSTEM_PROMPT = "You help people reflect on their week with kind, practical insights."

ANALYZE_SYSTEM_PROMPT = (
    "You are an insightful journaling assistant. Analyze the user's entries and give "
    "meaningful advice based on their patterns. Connect specific moods to days or "
    "activities. Keep it under 60 words."
)


def weekly_prompt(reflection_text: str) -> str:
    return (
        "You are a supportive journaling coach.\n\n"
        "The user wrote this weekly reflection:\n\n"
        f'"{reflection_text}"\n\n'
        "1. Summarize 2-3 key emotional themes you notice.\n"
        "2. Give 2 short, practical suggestions for next week.\n"
        "3. Keep it warm, encouraging, and under 200 words total.\n"
    )


def entries_context(entries: list[dict]) -> str:
    return "\n---\n".join(
        f"Date: {e.get('entry_date')}, Mood: {e.get('mood') or 'N/A'}, Text: {e.get('gratitude_text') or 'No text'}"
        for e in entries
    )


class InsightService:
    @staticmethod
    async def _ask(llm_router, system_prompt: str, user_prompt: str, cache_ttl: int) -> str:
        if not llm_router.available:
            raise AIUnavailableError("AI service not configured")

        resp = await llm_router.route(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            cache_ttl=cache_ttl,
        )
        if resp.get("status") != "success" or not resp.get("text"):
            logger.error(f"AI insight failed: {resp.get('error')}")
            raise AIUnavailableError("No insight generated")

        logger.info(f"AI insight generated by {resp.get('provider')} ({len(resp['text'])} chars)")
        return resp["text"]

    @staticmethod
    async def weekly_insight(llm_router, reflection_text: str) -> str:
        return await InsightService._ask(llm_router, WEEKLY_SYSTEM_PROMPT, weekly_prompt(reflection_text), 3600)

    @staticmethod
    async def analyze_entries(llm_router, entries: list[dict]) -> str:
        return await InsightService._ask(llm_router, ANALYZE_SYSTEM_PROMPT, entries_context(entries), 3600)
