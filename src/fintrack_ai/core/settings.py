import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

from fintrack_ai.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.yaml"

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODELS = (
    "llama-3.3-70b-versatile",
    "qwen-2.5-32b",
    "llama-3.1-8b-instant",
    "gemma2-9b-it",
    "mixtral-8x7b-32768",
)
DEFAULT_CACHE_TTL = 24 * 60 * 60
DEFAULT_SIMILARITY_THRESHOLD = 0.8
DEFAULT_BATCH_SIZE = 10
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 2
DEFAULT_CHAT_COOLDOWN = 5 * 60
DEFAULT_JOB_WORKERS = 2

_CONFIG_FILE_PATH: str | None = None
_CONFIG_FILE_VALUES: dict[str, str] = {}

_CONFIG_KEYS = (
    "LOG_LEVEL",
    "LOG_DIR",
    "DATA_DIR",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODELS",
    "CATEGORIZATION_CACHE_TTL",
    "SIMILARITY_THRESHOLD",
    "BATCH_SIZE",
    "MAX_RETRIES",
    "RETRY_DELAY",
    "CHAT_RATE_LIMIT_COOLDOWN",
    "JOB_WORKERS",
)


def _resolve_dotenv_path() -> str | None:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        candidate = os.path.join(config_dir, ".env")
        if os.path.exists(candidate):
            return candidate
    return find_dotenv(usecwd=True) or None


def _resolve_config_path() -> str:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        return os.path.join(config_dir, CONFIG_FILENAME)
    nested = os.path.join(os.getcwd(), "config", CONFIG_FILENAME)
    if os.path.exists(nested):
        return nested
    return os.path.join(os.getcwd(), CONFIG_FILENAME)


def _strip_comment(raw_value: str) -> str:
    quote: str | None = None
    for index, char in enumerate(raw_value):
        if quote:
            if char == quote and raw_value[index - 1] != "\\":
                quote = None
        elif char in {'"', "'"}:
            quote = char
        elif char == "#":
            return raw_value[:index].rstrip()
    return raw_value


def _unquote(raw_value: str) -> str:
    if len(raw_value) >= 2 and raw_value[0] == raw_value[-1] and raw_value[0] in {'"', "'"}:
        quote = raw_value[0]
        return raw_value[1:-1].replace(f"\\{quote}", quote).replace("\\\\", "\\")
    return raw_value


def parse_config_line(line: str) -> tuple[str, str] | None:
    """Parse one ``KEY: value`` line of config.yaml; comments and blanks yield None."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#") or ":" not in stripped:
        return None
    key, raw_value = stripped.split(":", 1)
    key = key.strip()
    value = _unquote(_strip_comment(raw_value).strip())
    if not key or not value:
        return None
    return key, value


def read_config_file(path: str | None) -> dict[str, str]:
    if not path or not os.path.exists(path):
        return {}
    values: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            parsed = parse_config_line(line)
            if parsed:
                values[parsed[0]] = parsed[1]
    return values


def load_environment() -> None:
    """
    Populate os.environ from .env first and config.yaml second.

    Variables already present in the process environment always win.
    """
    global _CONFIG_FILE_PATH
    global _CONFIG_FILE_VALUES

    dotenv_path = _resolve_dotenv_path()
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    _CONFIG_FILE_PATH = _resolve_config_path()
    _CONFIG_FILE_VALUES = read_config_file(_CONFIG_FILE_PATH)

    for key in _CONFIG_KEYS:
        if key not in os.environ and key in _CONFIG_FILE_VALUES:
            os.environ[key] = _CONFIG_FILE_VALUES[key]


def get_config_path() -> str | None:
    return _CONFIG_FILE_PATH


def ensure_dirs(*paths: str | None) -> None:
    for path in paths:
        if path and path not in {".", "./"}:
            os.makedirs(path, exist_ok=True)


def get_env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning(
            "[ENV] %s='%s' below minimum %s, using default %s.",
            name,
            raw,
            min_value,
            default,
        )
        return default
    return value


def get_env_float(
    name: str,
    default: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if (min_value is not None and value < min_value) or (max_value is not None and value > max_value):
        logger.warning("[ENV] %s='%s' out of range, using default %s.", name, raw, default)
        return default
    return value


def get_env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class AISettings:
    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    models: tuple[str, ...] = field(default=DEFAULT_MODELS)
    cache_ttl: int = DEFAULT_CACHE_TTL
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    batch_size: int = DEFAULT_BATCH_SIZE
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: int = DEFAULT_RETRY_DELAY
    chat_cooldown: int = DEFAULT_CHAT_COOLDOWN
    job_workers: int = DEFAULT_JOB_WORKERS


def load_ai_settings() -> AISettings:
    return AISettings(
        api_key=os.getenv("OPENAI_API_KEY") or None,
        base_url=os.getenv("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        models=get_env_list("OPENAI_MODELS", DEFAULT_MODELS),
        cache_ttl=get_env_int("CATEGORIZATION_CACHE_TTL", DEFAULT_CACHE_TTL, min_value=1),
        similarity_threshold=get_env_float(
            "SIMILARITY_THRESHOLD", DEFAULT_SIMILARITY_THRESHOLD, min_value=0.0, max_value=1.0
        ),
        batch_size=get_env_int("BATCH_SIZE", DEFAULT_BATCH_SIZE, min_value=1),
        max_retries=get_env_int("MAX_RETRIES", DEFAULT_MAX_RETRIES, min_value=0),
        retry_delay=get_env_int("RETRY_DELAY", DEFAULT_RETRY_DELAY, min_value=0),
        chat_cooldown=get_env_int("CHAT_RATE_LIMIT_COOLDOWN", DEFAULT_CHAT_COOLDOWN, min_value=1),
        job_workers=get_env_int("JOB_WORKERS", DEFAULT_JOB_WORKERS, min_value=1),
    )


_SENSITIVE_MARKERS = ("KEY", "TOKEN", "SECRET", "PASSWORD", "AUTH")


def _should_mask(name: str, value: str) -> bool:
    if any(marker in name.upper() for marker in _SENSITIVE_MARKERS):
        return True
    return value.startswith(("sk-", "gsk_", "Bearer ", "bearer "))


def mask_env_value(name: str, value: str) -> str:
    sanitized = value.replace("\r", "\\r").replace("\n", "\\n")
    if not _should_mask(name, sanitized):
        return sanitized
    if len(sanitized) <= 4:
        return "****"
    return f"{sanitized[:2]}...{sanitized[-2:]}"


def log_environment() -> None:
    logger.info("[ENV] Logging configured environment variables (masked where needed).")
    for key in _CONFIG_KEYS:
        raw_value = os.getenv(key)
        value = "<unset>" if raw_value is None else mask_env_value(key, raw_value)
        logger.info("[ENV] %s=%s", key, value)


load_environment()

DATA_DIR = os.getenv("DATA_DIR", ".")
LOG_DIR = os.getenv("LOG_DIR")
CONFIG_DIR = os.getenv("CONFIG_DIR")

ensure_dirs(DATA_DIR, LOG_DIR, CONFIG_DIR)
