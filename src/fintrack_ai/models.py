import datetime as dt
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

TransactionType = Literal["income", "outcome"]
CategorizationStatus = Literal["pending", "completed"]
ChatContext = Literal["dashboard", "income", "outcome", "settings"]

CATCH_ALL_CATEGORY = "Lain-lain"


class Category(BaseModel):
    id: int | None = None
    name: str
    icon: str = "CircleDollarSignIcon"
    description: str | None = None
    user_id: int | None = None


class CategorizationResult(BaseModel):
    category_name: str
    source: str  # "shortcut", "cache_exact", "cache_fuzzy", "llm"
    confidence: float = 1.0
    model_version: str | None = None


class Currency(BaseModel):
    id: int | None = None
    user_id: int | None = None
    name: str  # ISO-like code, e.g. IDR
    symbol: str = ""
    exchange_rate: float = 1.0


class Transaction(BaseModel):
    id: int | None = None
    user_id: int | None = None
    account_id: int
    type: TransactionType = "outcome"
    description: str
    amount: Decimal
    currency_id: int | None = None
    transaction_date: date = Field(default_factory=date.today)
    category_id: int | None = None
    categorization_status: CategorizationStatus = "pending"

    @field_validator("amount", mode="before")
    @classmethod
    def _two_places(cls, value: Any) -> Decimal:
        return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class ParsedTransactionCandidate(BaseModel):
    """A transaction extracted from one chat message, possibly incomplete."""
    description: str
    amount: float | None = None
    currency_id: int | None = None
    currency_code: str | None = None
    raw_currency: str | None = None
    date: dt.date
    type: TransactionType | None = None
    category_name: str | None = None
    context: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.amount is not None and self.currency_id is not None


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    message: str


class TransactionResult(BaseModel):
    success: bool
    type: TransactionType | None = None
    transaction: Transaction | None = None
    error: str | None = None
    data: ParsedTransactionCandidate | None = None


class ChatResponse(BaseModel):
    success: bool
    message: str
    context: str | None = None
    action: str | None = None
    pending_transactions: list[ParsedTransactionCandidate] | None = None
    results: list[TransactionResult] | None = None
    model_used: str | None = None
    timestamp: str | None = None
    error: str | None = None
    debug_info: dict[str, Any] | None = None

    @classmethod
    def stamped(cls, **kwargs: Any) -> "ChatResponse":
        kwargs.setdefault("timestamp", datetime.now().strftime("%Y-%m-%d %H:%M:%S"))
        return cls(**kwargs)
