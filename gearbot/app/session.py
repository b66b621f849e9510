#!/usr/bin/env python3
"""
Session management module for the Gear9 chatbot.

This module keeps the per-conversation reply language in memory. Entries live
for the lifetime of the process and are only removed by an explicit clear.
"""

import threading
from typing import Dict, Optional

from ..nlu.language import FRENCH, LanguageDetector, coerce_language
from ..utils.logger import get_logger

logger = get_logger()


class ConversationLanguageStore:
    """Thread-safe mapping from conversation id to its sticky language ("en" or "fr")."""

    def __init__(self, detector: Optional[LanguageDetector] = None, default_language: str = FRENCH):
        """
        Initialize an empty store.

        Args:
            detector: Detector used for messages without an explicit language
            default_language: Language reported for unknown conversations
        """
        self.detector = detector or LanguageDetector()
        self.default_language = default_language
        self._languages: Dict[str, str] = {}
        # Conversations whose language was chosen by the caller; detection never overrides them
        self._forced: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def resolve(self, conversation_id: Optional[str], message: Optional[str],
                explicit_language: Optional[str] = None) -> str:
        """
        Work out the reply language for one incoming message.

        Args:
            conversation_id: Conversation identifier, may be None
            message: The user's message
            explicit_language: Language requested by the caller ("en"/"fr", any case)

        Returns:
            "en" or "fr"
        """
        forced = coerce_language(explicit_language)
        if forced:
            self.force(conversation_id, forced)
            return forced

        if conversation_id is not None:
            with self._lock:
                if self._forced.get(conversation_id):
                    return self._languages[conversation_id]

        return self.detect_and_store(conversation_id, message)

    def detect_and_store(self, conversation_id: Optional[str], message: Optional[str]) -> str:
        """
        Detect the language of a message and remember it for the conversation.

        A None message keeps whatever the conversation already has.
        """
        if message is None:
            return self.get(conversation_id)

        detected = self.detector.detect(message)
        if conversation_id is not None:
            with self._lock:
                self._languages[conversation_id] = detected
                self._forced.pop(conversation_id, None)
        return detected

    def force(self, conversation_id: Optional[str], language: Optional[str]) -> None:
        """Pin a conversation to a language; invalid codes fall back to French."""
        if conversation_id is None or language is None:
            return
        lang = coerce_language(language) or FRENCH
        with self._lock:
            self._languages[conversation_id] = lang
            self._forced[conversation_id] = True
        logger.debug(f"[SESSION] Conversation {conversation_id} pinned to {lang}")

    def get(self, conversation_id: Optional[str]) -> str:
        if conversation_id is None:
            return self.default_language
        with self._lock:
            return self._languages.get(conversation_id, self.default_language)

    def is_forced(self, conversation_id: Optional[str]) -> bool:
        with self._lock:
            return bool(self._forced.get(conversation_id))

    def forget(self, conversation_id: Optional[str]) -> bool:
        """
        Clear a conversation.

        Returns:
            True if the conversation had an entry
        """
        if conversation_id is None:
            return False
        with self._lock:
            self._forced.pop(conversation_id, None)
            return self._languages.pop(conversation_id, None) is not None

    def __contains__(self, conversation_id: object) -> bool:
        with self._lock:
            return conversation_id in self._languages

    def __len__(self) -> int:
        with self._lock:
            return len(self._languages)
