from providers.base import BaseProvider


GROQ_MODELS = [
    "llama-3.1-8b-instant",
    "llama-3.3-70b-versatile",
]


class GroqProvider(BaseProvider):
    """Provider for the Groq inference API."""

    endpoint = "https://api.groq.com/openai/v1/chat/completions"
    default_model = GROQ_MODELS[0]

    @property
    def name(self) -> str:
        return "groq"
