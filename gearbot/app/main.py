#!/usr/bin/env python3
"""
Main FastAPI application for the Gear9 chatbot.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import List

from .config import Config
from .controller import Controller
from ..schemas.io_models import ChatRequest, ChatResponse, ClearResponse
from ..utils.logger import get_logger

logger = get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Gear9 Chatbot API",
    description="Company information chatbot with a generative fallback",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials="*" not in Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize components
controller = Controller()


@app.post("/api/chat", response_model=ChatResponse)
def chat(request: ChatRequest):
    """
    Answer one chat message.

    Args:
        request: Message with optional conversation id and language

    Returns:
        The reply
    """
    reply = controller.handle_message(request.message, request.conversationId, request.language)
    return ChatResponse(reply=reply)


@app.get("/api/chat/subjects", response_model=List[str])
async def subjects():
    """Labels for client-side autocomplete."""
    return controller.subjects()


@app.delete("/api/chat/{conversation_id}", response_model=ClearResponse)
async def clear_conversation(conversation_id: str):
    """Forget the stored language of a conversation."""
    cleared = controller.forget(conversation_id)
    logger.info(f"[API] Cleared conversation {conversation_id}: {cleared}")
    return ClearResponse(cleared=cleared)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    Config.debug_print()
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
