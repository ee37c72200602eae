from providers.base import BaseProvider


OPENROUTER_MODELS = [
    "mistralai/mistral-7b-instruct:free",
    "meta-llama/llama-3-8b-instruct:free",
]


class OpenRouterProvider(BaseProvider):
    """Provider for OpenRouter's free-tier models."""

    endpoint = "https://openrouter.ai/api/v1/chat/completions"
    default_model = OPENROUTER_MODELS[0]

    @property
    def name(self) -> str:
        return "openrouter"

    def headers(self) -> dict:
        # OpenRouter uses these for app attribution
        return {
            **super().headers(),
            "HTTP-Referer": "http://localhost:5173",
            "X-Title": "Gratitude Journal",
        }
