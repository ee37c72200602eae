"""
cache_service.py — AI response caching
In-memory cache keyed by SHA-256 of the chat messages and model, with
TTL-based expiry and hit-rate statistics.
"""

import hashlib
import json
import threading
import time


class ResponseCache:
    """In-memory LLM response cache with TTL and hit tracking."""

    def __init__(self, clock=time.time):
        # hash → {response, timestamp, ttl}
        self._cache: dict[str, dict] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._hits: int = 0
        self._misses: int = 0

    # ------------------------------------------------------------------
    @staticmethod
    def _hash(messages: list[dict], model: str) -> str:
        raw = json.dumps({"messages": messages, "model": model}, sort_keys=True)
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    # ------------------------------------------------------------------
    def get(self, messages: list[dict], model: str = "") -> dict | None:
        """Return cached response or None on miss / expiry."""
        key = self._hash(messages, model)
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            if self._clock() - entry["timestamp"] > entry["ttl"]:
                del self._cache[key]
                self._misses += 1
                return None

            self._hits += 1
            return entry["response"]

    # ------------------------------------------------------------------
    def set(self, messages: list[dict], model: str, response: dict, ttl_seconds: int = 3600):
        """Store a response with a TTL (seconds). ttl_seconds=0 → don't cache."""
        if ttl_seconds <= 0:
            return
        key = self._hash(messages, model)
        with self._lock:
            self._cache[key] = {
                "response": response,
                "timestamp": self._clock(),
                "ttl": ttl_seconds,
            }

    # ------------------------------------------------------------------
    def get_stats(self) -> dict:
        total_lookups = self._hits + self._misses
        return {
            "total_entries": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total_lookups, 4) if total_lookups else 0.0,
        }
