"""Research chat API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from portfolio_chat.api.dependencies import get_chat_service
from portfolio_chat.chat.service import ChatService
from portfolio_chat.models.dto import ChatRequest, ChatResponse, ErrorResponse

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Blank question"},
    401: {"model": ErrorResponse, "description": "Provider rejected the API key"},
    500: {"model": ErrorResponse, "description": "Missing credential or generation failure"},
}


@router.post(
    "/research-chat",
    response_model=ChatResponse,
    responses=_ERROR_RESPONSES,
    summary="Answer a question about the portfolio owner's work",
)
def research_chat(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    # Sync handler: the blocking provider call runs on the threadpool.
    return service.answer(request)
