"""Pydantic models for the chat API."""
from pydantic import BaseModel, field_validator
from typing import Optional


class ChatRequest(BaseModel):
    message: str
    conversationId: Optional[str] = None
    language: Optional[str] = None

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatResponse(BaseModel):
    reply: str


class ClearResponse(BaseModel):
    cleared: bool
