"""
Inventory assistant endpoints.
"""

from fastapi import APIRouter, Depends

from prostock.api.dependencies import get_chat_use_case, get_context, get_insights_use_case
from prostock.application import AppContext
from prostock.application.dto.requests import ChatRequest
from prostock.application.dto.responses import (
    ChatMessageResponse,
    ChatResponse,
    InsightsResponse,
)
from prostock.application.use_cases import ChatWithInventoryUseCase, InventoryInsightsUseCase

router = APIRouter(prefix="/api/assistant", tags=["assistant"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    ctx: AppContext = Depends(get_context),
    use_case: ChatWithInventoryUseCase = Depends(get_chat_use_case),
) -> ChatResponse:
    """Ask about the cached inventory. Never fails on LLM outages."""
    reply = await use_case.execute(request.message)
    return ChatResponse(
        reply=ChatMessageResponse.from_entity(reply),
        message_count=len(ctx.conversation),
    )


@router.get("/messages", response_model=list[ChatMessageResponse])
async def list_messages(ctx: AppContext = Depends(get_context)) -> list[ChatMessageResponse]:
    ctx.require_user()
    return [ChatMessageResponse.from_entity(m) for m in ctx.conversation]


@router.get("/insights", response_model=InsightsResponse)
async def insights(
    use_case: InventoryInsightsUseCase = Depends(get_insights_use_case),
) -> InsightsResponse:
    return InsightsResponse(insights=await use_case.execute())
