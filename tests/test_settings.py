from pathlib import Path

import pytest

from fintrack_ai.core import settings
from fintrack_ai.core.settings import (
    DEFAULT_MODELS,
    load_ai_settings,
    mask_env_value,
    parse_config_line,
    read_config_file,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("OPENAI_BASE_URL: https://api.groq.com/openai/v1", ("OPENAI_BASE_URL", "https://api.groq.com/openai/v1")),
        ('LOG_LEVEL: "DEBUG"  # verbose', ("LOG_LEVEL", "DEBUG")),
        ("OPENAI_MODELS: 'a#1,b'", ("OPENAI_MODELS", "a#1,b")),
        ("# comment", None),
        ("BATCH_SIZE:", None),
        ("", None),
    ],
)
def test_parse_config_line(line: str, expected: tuple[str, str] | None) -> None:
    assert parse_config_line(line) == expected


def test_read_config_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("BATCH_SIZE: 5\n\n# note\nRETRY_DELAY: 1\n", encoding="utf-8")

    assert read_config_file(str(path)) == {"BATCH_SIZE": "5", "RETRY_DELAY": "1"}
    assert read_config_file(str(tmp_path / "missing.yaml")) == {}


def test_load_environment_prefers_process_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "config.yaml").write_text("BATCH_SIZE: 5\nMAX_RETRIES: 1\n", encoding="utf-8")
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("MAX_RETRIES", "7")
    # load_environment writes os.environ directly; register the key so teardown restores it
    monkeypatch.setenv("BATCH_SIZE", "placeholder")
    monkeypatch.delenv("BATCH_SIZE")

    settings.load_environment()

    assert settings.get_config_path() == str(tmp_path / "config.yaml")
    loaded = load_ai_settings()
    assert loaded.batch_size == 5
    assert loaded.max_retries == 7


def test_load_ai_settings_defaults_and_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("OPENAI_API_KEY", "OPENAI_MODELS", "BATCH_SIZE", "RETRY_DELAY"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SIMILARITY_THRESHOLD", "1.5")
    monkeypatch.setenv("CATEGORIZATION_CACHE_TTL", "abc")
    monkeypatch.setenv("CHAT_RATE_LIMIT_COOLDOWN", "0")

    loaded = load_ai_settings()

    assert loaded.api_key is None
    assert loaded.models == DEFAULT_MODELS
    assert loaded.similarity_threshold == 0.8
    assert loaded.cache_ttl == 24 * 60 * 60
    assert loaded.chat_cooldown == 300
    assert loaded.batch_size == 10
    assert loaded.retry_delay == 2


def test_model_list_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_MODELS", "llama-3.1-8b-instant, , gemma2-9b-it")
    assert load_ai_settings().models == ("llama-3.1-8b-instant", "gemma2-9b-it")


def test_mask_env_value() -> None:
    assert mask_env_value("OPENAI_API_KEY", "gsk_abcdef") == "gs...ef"
    assert mask_env_value("OPENAI_BASE_URL", "https://api.groq.com") == "https://api.groq.com"
    assert mask_env_value("SOMETHING", "sk-abcdef") == "sk...ef"
    assert mask_env_value("OPENAI_API_KEY", "abc") == "****"
