import asyncio
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from fintrack_ai.api.dependencies import get_chat_service
from fintrack_ai.api.schemas import ChatRequest
from fintrack_ai.logger import get_logger
from fintrack_ai.models import ChatContext, ChatResponse
from fintrack_ai.services.chat import ChatService

logger = get_logger(__name__)

router = APIRouter(prefix="/ai-chat")


@router.post("/send", response_model=ChatResponse, response_model_exclude_none=True)
async def send_message(
    req: ChatRequest,
    chat: Annotated[ChatService, Depends(get_chat_service)],
) -> ChatResponse:
    logger.info("[CHAT] Message received in %s context (%s history turns).", req.context, len(req.conversation_history))
    return await asyncio.to_thread(
        chat.generate_chat_response,
        req.message,
        req.context,
        req.context_data,
        req.conversation_history,
        req.user_id,
    )


@router.get("/starters")
async def conversation_starters(
    chat: Annotated[ChatService, Depends(get_chat_service)],
    context: ChatContext = "dashboard",
) -> dict[str, Any]:
    return {"success": True, "starters": chat.get_conversation_starters(context)}
