from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest

from fintrack_ai.cache.store import InMemoryCache
from fintrack_ai.classifiers.llm import LLMClassifier
from fintrack_ai.llm.client import MultiModelClient
from fintrack_ai.llm.provider import OpenAICompatibleProvider
from fintrack_ai.llm.rate_limit import RateLimitTracker

from fakes import FakeProvider


@pytest.fixture
def mock_openai_client() -> Generator[MagicMock, None, None]:
    with patch("fintrack_ai.llm.provider.OpenAI") as mock:
        yield mock


def test_provider_generate(mock_openai_client: MagicMock) -> None:
    # Setup mock raw response
    mock_instance = mock_openai_client.return_value
    raw = MagicMock()
    raw.headers = {"X-RateLimit-Remaining-Requests": "99"}
    raw.parse.return_value.choices[0].message.content = "Transportasi"
    mock_instance.chat.completions.with_raw_response.create.return_value = raw

    provider = OpenAICompatibleProvider(api_key="gsk-fake", base_url="https://example.test/v1")
    response = provider.generate("llama-3.3-70b-versatile", "system", "gojek", temperature=0.2, max_tokens=50)

    assert response.text == "Transportasi"
    assert response.model == "llama-3.3-70b-versatile"
    assert response.headers == {"x-ratelimit-remaining-requests": "99"}

    # Verify call
    mock_instance.chat.completions.with_raw_response.create.assert_called_once()
    kwargs = mock_instance.chat.completions.with_raw_response.create.call_args.kwargs
    assert kwargs["model"] == "llama-3.3-70b-versatile"
    assert kwargs["temperature"] == 0.2
    assert kwargs["max_tokens"] == 50
    assert kwargs["messages"][1] == {"role": "user", "content": "gojek"}
    assert mock_openai_client.call_args.kwargs["max_retries"] == 0


def test_provider_without_choices(mock_openai_client: MagicMock) -> None:
    raw = MagicMock()
    raw.headers = {}
    raw.parse.return_value.choices = []
    mock_openai_client.return_value.chat.completions.with_raw_response.create.return_value = raw

    provider = OpenAICompatibleProvider(api_key="gsk-fake")
    assert provider.generate("m", "system", "x").text == ""


def test_llm_classify_sends_normalized_description() -> None:
    provider = FakeProvider({"model-a": "Transportasi"})
    client = MultiModelClient(provider, ["model-a"], RateLimitTracker(InMemoryCache()))
    classifier = LLMClassifier(client)

    res = classifier.classify("Pembayaran Gojek!!", existing_categories=["Makanan", "Belanja"])

    assert res is not None
    assert res.category_name == "Transportasi"
    assert res.source == "llm"
    assert res.model_version == "model-a"
    call = provider.calls[0]
    assert call["user_prompt"] == "gojek"
    assert call["temperature"] == 0.2
    assert call["max_tokens"] == 50
    assert "Belanja, Makanan" in call["system_prompt"]


def test_llm_classify_returns_none_when_all_models_fail() -> None:
    client = MultiModelClient(FakeProvider({}), ["model-a"], RateLimitTracker(InMemoryCache()))
    assert LLMClassifier(client).classify("gojek") is None


def test_llm_classify_skips_empty_description() -> None:
    provider = FakeProvider({"model-a": "Transportasi"})
    client = MultiModelClient(provider, ["model-a"], RateLimitTracker(InMemoryCache()))
    assert LLMClassifier(client).classify("!!!") is None
    assert provider.calls == []
