import logging
from abc import ABC, abstractmethod

import httpx

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Base class for OpenAI-compatible chat completion providers."""

    endpoint: str = ""
    default_model: str = ""
    timeout: float = 30.0

    def __init__(self, api_key: str):
        self.api_key = api_key

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of this provider (e.g. 'openrouter', 'groq')."""
        ...

    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _result(self, model: str, text: str | None = None, error: str | None = None) -> dict:
        return {
            "text": text,
            "provider": self.name,
            "model": model,
            "status": "failed" if error else "success",
            "error": error,
        }

    async def chat(self, messages: list[dict], model: str | None = None) -> dict:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
            model: Optional model identifier. Provider uses its default if None.

        Returns:
            dict with keys:
                - text: str | None  — the generated text
                - provider: str     — provider name
                - model: str        — model used
                - status: "success" | "failed"
                - error: str | None — error message on failure
        """
        used_model = model or self.default_model
        body = {
            "model": used_model,
            "messages": messages,
            "max_tokens": 512,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, headers=self.headers(), json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException:
            return self._result(used_model, error="Timeout")
        except httpx.HTTPError as e:
            logger.warning(f"{self.name} request failed: {e}")
            return self._result(used_model, error=str(e))
        except ValueError as e:
            logger.warning(f"{self.name} returned a non-JSON body: {e}")
            return self._result(used_model, error="Malformed response")

        try:
            choices = data.get("choices") or []
            text = choices[0]["message"]["content"] if choices else None
        except (AttributeError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"{self.name} returned an unexpected payload: {e!r}")
            return self._result(used_model, error="Malformed response")
        if not text or not isinstance(text, str):
            return self._result(used_model, error="Empty response")
        return self._result(used_model, text=text.strip())

