from fastapi import HTTPException, Request

from fintrack_ai.manager import CategorizerService
from fintrack_ai.services.chat import ChatService
from fintrack_ai.services.transactions import TransactionEntryService
from fintrack_ai.storage.categories import CategoryRepository


def get_service(request: Request) -> CategorizerService:
    service = getattr(request.app.state, "service", None)
    if not service:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return service


def get_chat_service(request: Request) -> ChatService:
    chat = getattr(request.app.state, "chat", None)
    if not chat:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return chat


def get_transaction_entries(request: Request) -> TransactionEntryService:
    entries = getattr(request.app.state, "entries", None)
    if not entries:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return entries


def get_category_repository(request: Request) -> CategoryRepository | None:
    return getattr(request.app.state, "categories", None)
