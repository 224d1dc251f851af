"""Xyro assistant endpoint."""

from fastapi import APIRouter, Depends

from hiregenius.core.auth import UserContext, get_current_user
from hiregenius.models.schemas import ChatRequest, ChatResponse
from hiregenius.services import llm_service

router = APIRouter(prefix="/assistant", tags=["Assistant"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    user: UserContext = Depends(get_current_user),
):
    """Ask Xyro anything. Stateless: each message is answered on its own."""
    return await llm_service.assistant_chat(user.user_id, body.message)
