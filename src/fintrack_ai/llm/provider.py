from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from openai import OpenAI

from fintrack_ai.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LLMResponse:
    text: str
    model: str
    headers: dict[str, str] = field(default_factory=dict)


class LLMProvider(Protocol):
    def generate(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse: ...


def lowercase_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    return {str(key).lower(): str(value) for key, value in headers.items()}


class OpenAICompatibleProvider:
    """
    Chat-completions adapter for any OpenAI-compatible endpoint (Groq by default).

    Raw responses are requested so the rate-limit headers reach the caller.
    """

    def __init__(self, api_key: str, base_url: str | None = None, timeout: float = 30.0):
        self.client = OpenAI(api_key=api_key, base_url=base_url or None, timeout=timeout, max_retries=0)

    def generate(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        options: dict[str, float | int] = {}
        if temperature is not None:
            options["temperature"] = temperature
        if max_tokens is not None:
            options["max_tokens"] = max_tokens

        raw = self.client.chat.completions.with_raw_response.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **options,
        )
        completion = raw.parse()
        return LLMResponse(
            text=self._extract_text(completion),
            model=model,
            headers=lowercase_headers(raw.headers),
        )

    @staticmethod
    def _extract_text(completion: object) -> str:
        choices = getattr(completion, "choices", None)
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        return content or ""
