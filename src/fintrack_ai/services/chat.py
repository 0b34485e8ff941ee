import re
from collections.abc import Mapping, Sequence
from typing import Any

from fintrack_ai.cache.store import CacheStore
from fintrack_ai.core.settings import AISettings
from fintrack_ai.llm.client import MultiModelClient
from fintrack_ai.llm.provider import LLMProvider
from fintrack_ai.llm.rate_limit import RateLimitTracker
from fintrack_ai.logger import get_logger
from fintrack_ai.models import ChatMessage, ChatResponse, TransactionType

from .confirmation import format_confirmation, format_results
from .currencies import CurrencyResolver
from .prompts import (
    CONVERSATION_STARTERS,
    DEFAULT_STARTERS,
    build_chat_system_prompt,
    build_conversation_prompt,
)
from .transaction_parser import TransactionIntentParser
from .transactions import TransactionEntryService

logger = get_logger(__name__)

CHAT_RATE_LIMIT_NAMESPACE = "llm_chat_rate_limit_"
HISTORY_TURNS = 5

APOLOGY_MESSAGE = "Maaf, saya sedang mengalami gangguan. Coba lagi dalam beberapa saat ya!"
PROCESSING_FAILED_MESSAGE = "Terjadi kesalahan saat memproses transaksi. Silakan coba lagi."
MISSING_ACCOUNT_MESSAGE = "Account ID tidak ditemukan. Silakan refresh halaman dan coba lagi."
UNRECOGNIZED_FORMAT_PREFIX = "Maaf, saya tidak dapat mengenali format transaksi dalam pesan Anda. Silakan gunakan format seperti: "
UNRECOGNIZED_FORMAT_EXAMPLES = {
    "dashboard": '"Catat Pengeluaran: Makan Enak Rp 5000" atau "Catat Pemasukan: Gaji Rp 5000000"',
    "default": '"Makan enak Rp 8000" atau "Belanja beras tanggal 5 agustus Rp 4000"',
}

TRANSACTION_CONTEXTS = ("dashboard", "income", "outcome")

DASHBOARD_PREFIXES = (
    "catat pengeluaran",
    "catat pemasukan",
    "input pengeluaran",
    "input pemasukan",
    "tambah pengeluaran",
    "tambah pemasukan",
)

TRANSACTION_KEYWORDS = (
    "rp", "rupiah", "idr", "sgd", "usd", "eur",
    "jajan", "belanja", "beli", "bayar", "dapat", "terima", "gaji", "bonus",
    "tanggal", "hari ini", "kemarin", "besok", "januari", "februari", "maret",
    "april", "mei", "juni", "juli", "agustus", "september", "oktober", "november", "desember",
)

_AMOUNT_PATTERNS = (
    re.compile(r"\d+[.,]?\d*\s*(rp|rupiah|idr|sgd|usd|eur)", re.IGNORECASE),
    re.compile(r"(rp|rupiah|idr|sgd|usd|eur)\s*\d+[.,]?\d*", re.IGNORECASE),
)


def build_chat_client(
    provider: LLMProvider | None,
    settings: AISettings,
    cache: CacheStore,
) -> MultiModelClient | None:
    """Model chain for chat replies with its own, longer, rate-limit cooldown."""
    if provider is None:
        return None
    tracker = RateLimitTracker(
        cache,
        namespace=CHAT_RATE_LIMIT_NAMESPACE,
        default_cooldown=settings.chat_cooldown,
        extra_markers=("quota",),
    )
    return MultiModelClient(provider, settings.models, tracker, name="CHAT")


def is_transaction_input(message: str, context: str = "") -> bool:
    text = message.lower()
    if context == "dashboard":
        return any(prefix in text for prefix in DASHBOARD_PREFIXES)

    if any(pattern.search(text) for pattern in _AMOUNT_PATTERNS):
        return True
    return any(keyword in text for keyword in TRANSACTION_KEYWORDS)


def _history_entries(history: Sequence[ChatMessage | Mapping[str, Any]] | None) -> list[dict[str, str]]:
    entries = []
    for item in history or []:
        if isinstance(item, ChatMessage):
            entries.append(item.model_dump())
        else:
            entries.append({"role": str(item.get("role", "")), "message": str(item.get("message", ""))})
    return entries


class ChatService:
    def __init__(
        self,
        client: MultiModelClient | None,
        parser: TransactionIntentParser,
        entries: TransactionEntryService,
        currencies: CurrencyResolver,
    ):
        self.client = client
        self.parser = parser
        self.entries = entries
        self.currencies = currencies

    def generate_chat_response(
        self,
        message: str,
        context: str,
        context_data: dict[str, Any] | None = None,
        history: Sequence[ChatMessage | Mapping[str, Any]] | None = None,
        user_id: int | None = None,
    ) -> ChatResponse:
        context_data = context_data or {}
        try:
            if context in TRANSACTION_CONTEXTS and is_transaction_input(message, context):
                return self.handle_transaction_input(message, context, context_data, user_id)

            if self.client is None:
                raise RuntimeError("No chat model configured")

            response = self.client.generate(
                build_chat_system_prompt(context, context_data),
                build_conversation_prompt(_history_entries(history), message, turns=HISTORY_TURNS),
            )
            return ChatResponse.stamped(
                success=True,
                message=response.text.strip(),
                context=context,
                model_used=response.model,
            )
        except Exception as exc:
            logger.error("[CHAT] Chat response failed in %s context for '%s': %s", context, message[:100], exc)
            return ChatResponse(success=False, message=APOLOGY_MESSAGE, error="AI service temporarily unavailable")

    def handle_transaction_input(
        self,
        message: str,
        context: str,
        context_data: dict[str, Any],
        user_id: int | None = None,
    ) -> ChatResponse:
        try:
            candidates = self.parser.parse(message, context, user_id=user_id)
            if not candidates:
                examples = UNRECOGNIZED_FORMAT_EXAMPLES.get(context, UNRECOGNIZED_FORMAT_EXAMPLES["default"])
                return ChatResponse(
                    success=True,
                    message=UNRECOGNIZED_FORMAT_PREFIX + examples,
                    context=context,
                    action="error",
                )

            account_id = context_data.get("accountId")
            if not account_id:
                logger.error(
                    "[CHAT] Transaction input failed: missing account ID (context=%s, keys=%s, message='%s')",
                    context,
                    list(context_data),
                    message[:100],
                )
                return ChatResponse(
                    success=False,
                    message=MISSING_ACCOUNT_MESSAGE,
                    error="Missing account ID",
                    debug_info={"available_keys": list(context_data), "context": context},
                )

            results = []
            pending = []
            for candidate in candidates:
                kind = self.transaction_type(candidate.type, context, message)
                if not candidate.is_complete:
                    pending.append(candidate.model_copy(update={"context": kind}))
                    continue
                results.append(self.entries.create(candidate, kind, int(account_id), user_id))

            if pending:
                logger.info("[CHAT] %s transaction(s) need confirmation.", len(pending))
                return format_confirmation(pending, context, results, self.currencies)
            return format_results(results, context, self.currencies)
        except Exception as exc:
            logger.error("[CHAT] Transaction input handling failed in %s context for '%s': %s", context, message, exc)
            return ChatResponse(
                success=False,
                message=PROCESSING_FAILED_MESSAGE,
                error="Transaction processing failed",
            )

    @staticmethod
    def transaction_type(parsed_type: str | None, context: str, message: str) -> TransactionType:
        if context == "income":
            return "income"
        if context == "outcome":
            return "outcome"
        if parsed_type in ("income", "outcome"):
            return parsed_type
        return "income" if "pemasukan" in message.lower() else "outcome"

    def get_conversation_starters(self, context: str, context_data: dict[str, Any] | None = None) -> list[str]:
        return list(CONVERSATION_STARTERS.get(context, DEFAULT_STARTERS))
