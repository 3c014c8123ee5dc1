# unit_registry/routers/chat.py
"""Chat assistant. Stateless: every question carries a fresh snapshot of the records."""

from fastapi import APIRouter

from unit_registry.config import settings
from unit_registry.schemas.chat import ChatRequest, ChatResponse, WelcomeOut
from unit_registry.services import chat_service

router = APIRouter()


@router.get("/chat/welcome", response_model=WelcomeOut, summary="First message of the transcript")
async def welcome():
    return {"assistant": settings.ASSISTANT_NAME, "message": chat_service.welcome_message()}


@router.post("/chat", response_model=ChatResponse, summary="Ask the assistant about the records")
async def ask(body: ChatRequest):
    answer = await chat_service.answer_question(body.question)
    return {"answer": answer}
