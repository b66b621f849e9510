#!/usr/bin/env python3
"""
Generation module for the Gear9 chatbot.

This module handles fallback answers using the Gemini LLM API. It is only
called when the deterministic matcher and the canned replies have nothing.
"""

from typing import Any, Dict, Optional

import requests

from .config import Config
from .postprocess import Postprocessor
from .prompt_builder import PromptBuilder
from ..utils.logger import get_logger

logger = get_logger()

MISSING_KEY_MESSAGE = "Server is missing Gemini API key."
EMPTY_RESPONSE_MESSAGE = "The AI service did not return a response."
EMPTY_TEXT_MESSAGE = "The AI returned an empty response."
UNEXPECTED_FORMAT_MESSAGE = "The AI response format was unexpected."

QUOTA_MESSAGE_EN = ("I'm currently out of AI requests. You can still ask me about Gear9's address, services, "
                    "projects, clients, awards, or expertise, and I'll answer from my built-in knowledge.")
QUOTA_MESSAGE_FR = ("Je n'ai plus de requêtes IA pour le moment. Vous pouvez toujours me demander l'adresse, les "
                    "services, les projets, les clients, les distinctions ou l'expertise de Gear9, et je répondrai "
                    "avec mes connaissances intégrées.")

QUOTA_MARKERS = ("quota", "rate limit", "exceeded")


class GenerationError(Exception):
    """The fallback LLM failed for a reason other than quota exhaustion."""


def friendly_quota_message(language: Optional[str]) -> str:
    return QUOTA_MESSAGE_EN if (language or "").lower() == "en" else QUOTA_MESSAGE_FR


def is_quota_error(status_code: int, api_message: Optional[str]) -> bool:
    if status_code == 429:
        return True
    msg = (api_message or "").lower()
    return any(marker in msg for marker in QUOTA_MARKERS)


def extract_api_error_message(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return None


class GenerationClient:
    """Client for generating fallback answers using the Gemini LLM API."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 timeout: Optional[float] = None, prompt_builder: Optional[PromptBuilder] = None,
                 postprocessor: Optional[Postprocessor] = None):
        """Initialize the generation client."""
        self.api_key = api_key if api_key is not None else Config.GEMINI_API_KEY
        self.llm_model = model or Config.GEMINI_MODEL
        self.timeout = timeout or Config.GEMINI_TIMEOUT
        self.api_url = Config.gemini_url(self.llm_model)
        self.builder = prompt_builder or PromptBuilder()
        self.postprocessor = postprocessor or Postprocessor()

    def generate_reply(self, question: str, context: Optional[str] = None,
                       language: Optional[str] = None) -> str:
        """
        Generate an answer using the Gemini LLM.

        Args:
            question: The user's question
            context: Grounding context built from the knowledge base
            language: Reply language ("en"/"fr"), inferred from the question when None

        Returns:
            Generated answer text, or a friendly message when the quota is exhausted

        Raises:
            GenerationError: on any other API, network or payload failure
        """
        if not self.api_key:
            logger.warning("[GEMINI] No API key configured; fallback answers are disabled")
            return MISSING_KEY_MESSAGE

        payload = self.builder.build_payload(question, context, language)
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        logger.info(f"[GEMINI] Sending fallback request model={self.llm_model} context={bool(context)}")

        try:
            response = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"[GEMINI] Request failed: {e}")
            raise GenerationError("Unable to reach Gemini service. Please check your network.") from e

        if not response.ok:
            api_message = extract_api_error_message(response)
            if is_quota_error(response.status_code, api_message):
                logger.warning(f"[GEMINI] Quota or rate limit reached ({response.status_code}): {api_message}")
                return friendly_quota_message(language)
            detail = api_message or f"{response.status_code} {response.reason}"
            logger.error(f"[GEMINI] API error: {detail}")
            raise GenerationError(f"Gemini API error: {detail}")

        if not response.content:
            return EMPTY_RESPONSE_MESSAGE

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError(f"Failed to process AI response: {e}") from e

        return self._extract_text(data)

    def _extract_text(self, data: Dict[str, Any]) -> str:
        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            logger.warning(f"[GEMINI] Unexpected response structure: {data}")
            return UNEXPECTED_FORMAT_MESSAGE
        try:
            parts = (candidates[0].get("content") or {}).get("parts") or []
            if not parts:
                return UNEXPECTED_FORMAT_MESSAGE
            text = parts[0].get("text") or ""
            if not isinstance(text, str):
                raise TypeError(f"text is {type(text).__name__}, not str")
        except (AttributeError, KeyError, TypeError, IndexError) as e:
            logger.error(f"[GEMINI] Malformed response: {data}")
            raise GenerationError(f"Failed to process AI response: {e}") from e
        if not text.strip():
            return EMPTY_TEXT_MESSAGE
        return self.postprocessor.process_response(text)
