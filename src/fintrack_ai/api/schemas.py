from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from fintrack_ai.models import ChatContext, ChatMessage, TransactionType


class CategorizeRequest(BaseModel):
    description: str = Field(min_length=1)
    user_id: int | None = None


class CategorizeResponse(BaseModel):
    id: int | None
    name: str
    icon: str
    source: str


class BatchCategorizeRequest(BaseModel):
    descriptions: list[str]
    user_id: int | None = None


class TransactionCreateRequest(BaseModel):
    type: TransactionType
    account_id: int
    description: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    currency_id: int | None = None
    transaction_date: date | None = None
    user_id: int | None = None


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=1000)
    context: ChatContext
    context_data: dict[str, Any] = Field(default_factory=dict)
    conversation_history: list[ChatMessage] = Field(default_factory=list)
    user_id: int | None = None
