from collections.abc import Sequence

from fintrack_ai.llm.provider import LLMProvider, LLMResponse
from fintrack_ai.llm.rate_limit import RateLimitTracker
from fintrack_ai.logger import get_logger

logger = get_logger(__name__)


class AllModelsFailedError(RuntimeError):
    """Raised when every model in the preference list was skipped or failed."""

    def __init__(self, models: Sequence[str], last_error: BaseException | None = None):
        self.models = tuple(models)
        self.last_error = last_error
        detail = f": {last_error}" if last_error else ""
        super().__init__(f"All models failed ({', '.join(self.models)}){detail}")


class EmptyResponseError(RuntimeError):
    pass


class MultiModelClient:
    """
    Sends one prompt to an ordered list of models until one answers.

    Rate-limited models are skipped, rate-limit failures put the model on
    cooldown and any other failure just moves on to the next model.
    """

    def __init__(
        self,
        provider: LLMProvider,
        models: Sequence[str],
        tracker: RateLimitTracker,
        name: str = "LLM",
    ):
        if not models:
            raise ValueError("At least one model is required")
        self.provider = provider
        self.models = tuple(models)
        self.tracker = tracker
        self.name = name

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        last_error: BaseException | None = None
        for model in self.models:
            if self.tracker.is_limited(model):
                logger.warning("[%s] Rate limit active for model %s, skipping.", self.name, model)
                continue
            try:
                response = self.provider.generate(
                    model,
                    system_prompt,
                    user_prompt,
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
                self.tracker.observe_headers(model, response.headers)
                if not response.text.strip():
                    raise EmptyResponseError(f"Empty response from {model}")
                logger.debug("[%s] Model %s answered: '%s'", self.name, model, response.text[:80])
                return response
            except Exception as exc:
                last_error = exc
                if self.tracker.mark_from_error(model, exc):
                    logger.warning("[%s] Rate limit hit for model %s: %s", self.name, model, exc)
                else:
                    logger.warning("[%s] Model %s failed: %s", self.name, model, exc)

        logger.error("[%s] All models failed. Last error: %s", self.name, last_error or "all rate limited")
        raise AllModelsFailedError(self.models, last_error)
