#!/usr/bin/env python3
"""
Configuration management for the Gear9 chatbot backend.
"""

import os
from typing import Optional
from dotenv import load_dotenv

from ..utils.logger import get_logger

# Load environment variables from .env file
load_dotenv()

logger = get_logger()

DEFAULT_SYSTEM_PROMPT = (
    "You are GearBot, Gear9's assistant. Always be concise, factual, and professional. "
    "Answer in the same language as the user's last message (French or English). "
    "Do not greet unless explicitly asked. Prefer the company context provided "
    "(name, address, about, services, expertises, projects, awards). "
    "If information is missing, say so briefly and offer alternatives."
)


class Config:
    """Configuration class for the application."""

    # Gemini (Google) API Configuration for the fallback responder
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    GEMINI_API_BASE = os.getenv(
        "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta/models"
    )
    GEMINI_TIMEOUT = os.getenv("GEMINI_TIMEOUT", "20")
    SYSTEM_PROMPT = os.getenv("CHATBOT_SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT)

    # Knowledge base file; the bundled copy is used when this path is missing
    KNOWLEDGE_BASE_PATH = os.getenv("KNOWLEDGE_BASE_PATH", "data.json")

    # Application Configuration
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = os.getenv("PORT", "8080")
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Limits used when building answers and grounding context
    MAX_LISTED_ITEMS = 4
    MAX_GROUP_DETAILS = 5
    MAX_CONTEXT_ITEMS = 6

    @classmethod
    def gemini_url(cls, model: Optional[str] = None) -> str:
        return f"{cls.GEMINI_API_BASE.rstrip('/')}/{model or cls.GEMINI_MODEL}:generateContent"

    @classmethod
    def debug_print(cls):
        logger.info(f"[CONFIG] GEMINI_MODEL={cls.GEMINI_MODEL} set={bool(cls.GEMINI_API_KEY)} timeout={cls.GEMINI_TIMEOUT}s")
        logger.info(f"[CONFIG] KNOWLEDGE_BASE_PATH={cls.KNOWLEDGE_BASE_PATH}")
        logger.info(f"[CONFIG] CORS_ORIGINS={cls.CORS_ORIGINS} HOST={cls.HOST} PORT={cls.PORT}")

    @classmethod
    def validate(cls):
        """Validate that the numeric settings parse; coerce them in place."""
        invalid = []

        try:
            cls.PORT = int(cls.PORT)
        except (TypeError, ValueError):
            invalid.append("PORT")

        try:
            cls.GEMINI_TIMEOUT = float(cls.GEMINI_TIMEOUT)
            if cls.GEMINI_TIMEOUT <= 0:
                invalid.append("GEMINI_TIMEOUT")
        except (TypeError, ValueError):
            invalid.append("GEMINI_TIMEOUT")

        # A missing GEMINI_API_KEY is allowed: deterministic answers still work
        if invalid:
            raise ValueError(f"Invalid configuration: {', '.join(invalid)}")

        return True

# Validate configuration on import
Config.validate()
