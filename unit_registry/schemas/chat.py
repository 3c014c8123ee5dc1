# unit_registry/schemas/chat.py
from pydantic import BaseModel, field_validator


class ChatRequest(BaseModel):
    question: str

    @field_validator("question")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("A pergunta não pode estar vazia")
        return value.strip()


class ChatResponse(BaseModel):
    answer: str


class WelcomeOut(BaseModel):
    assistant: str
    message: str
