"""
llm_router.py — AI provider routing
Sends chat requests to the configured providers in score order with
automatic fallback, round-robin key rotation and optional response caching.
"""

import logging
import time

from config import GROQ_API_KEYS, OPENROUTER_API_KEYS
from services.cache_service import ResponseCache
from providers.groq_provider import GroqProvider
from providers.openrouter_provider import OpenRouterProvider

logger = logging.getLogger(__name__)

# Default priority order (lower = tried first)
_DEFAULT_PROVIDERS = [
    {"name": "openrouter", "provider_class": OpenRouterProvider, "priority": 1},
    {"name": "groq",       "provider_class": GroqProvider,       "priority": 2},
]


class LLMRouter:
    """Route AI requests to the best available provider."""

    def __init__(self, keys: dict[str, list[str]] | None = None):
        if keys is None:
            keys = {"openrouter": OPENROUTER_API_KEYS, "groq": GROQ_API_KEYS}
        self.cache = ResponseCache()

        # Only include providers that have at least one key configured
        self.providers: list[dict] = []
        for p in _DEFAULT_PROVIDERS:
            provider_keys = keys.get(p["name"]) or []
            if provider_keys:
                self.providers.append({
                    **p,
                    "keys": list(provider_keys),
                    "next_key": 0,
                    "failure_count": 0,
                    "avg_response_time": 0.0,
                    "total_calls": 0,
                })

    @property
    def available(self) -> bool:
        return bool(self.providers)

    # ------------------------------------------------------------------
    def _score(self, entry: dict) -> float:
        """Score a provider — lower is better."""
        return (
            entry["priority"]
            + (entry["failure_count"] * 5)
            + (entry["avg_response_time"] * 0.1)
        )

    def _next_key(self, entry: dict) -> str:
        key = entry["keys"][entry["next_key"] % len(entry["keys"])]
        entry["next_key"] += 1
        return key

    # ------------------------------------------------------------------
    async def route(self, messages: list, model: str | None = None, cache_ttl: int = 0) -> dict:
        """Route a chat request through available providers with fallback.

        Returns a dict with keys: text, provider, model, status, error, cached.
        status is "success" or "error".
        """
        if cache_ttl > 0:
            cached = self.cache.get(messages, model or "")
            if cached is not None:
                return {**cached, "cached": True}

        last_error = "No AI provider configured"
        for entry in sorted(self.providers, key=self._score):
            provider = entry["provider_class"](api_key=self._next_key(entry))
            t0 = time.time()
            result = await provider.chat(messages, model)
            elapsed = round(time.time() - t0, 3)

            if result.get("status") != "success":
                entry["failure_count"] += 1
                last_error = result.get("error") or f"{entry['name']} returned an error"
                logger.warning(f"AI provider {entry['name']} failed: {last_error}")
                continue

            entry["total_calls"] += 1
            entry["avg_response_time"] = round(
                (entry["avg_response_time"] * (entry["total_calls"] - 1) + elapsed) / entry["total_calls"],
                3,
            )
            entry["failure_count"] = max(0, entry["failure_count"] - 1)

            response = {
                "text": result["text"],
                "provider": result.get("provider", entry["name"]),
                "model": result.get("model", model),
                "status": "success",
                "error": None,
            }
            self.cache.set(messages, model or "", response, cache_ttl)
            return {**response, "cached": False}

        return {
            "text": None,
            "provider": None,
            "model": None,
            "status": "error",
            "error": last_error,
            "cached": False,
        }


_router_instance = None


def get_llm_router() -> LLMRouter:
    global _router_instance
    if _router_instance is None:
        _router_instance = LLMRouter()
    return _router_instance
