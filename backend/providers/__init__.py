from providers.base import BaseProvider
from providers.groq_provider import GroqProvider
from providers.openrouter_provider import OpenRouterProvider


__all__ = [
    "BaseProvider",
    "GroqProvider",
    "OpenRouterProvider",
]
