#!/usr/bin/env python3
"""
Postprocessing module for the Gear9 chatbot.

This module cleans replies coming back from the fallback LLM.
"""

import re

_GREETING = r"(?:bonjour|salut|bonsoir|hello|hi)\b"
_LEADING_GREETING = re.compile(r"^\s*" + _GREETING + r"\s*[!.,]*(?:\r?\n)*", re.IGNORECASE)


class Postprocessor:
    """Postprocesses LLM responses for the Gear9 chatbot."""

    def clean_response(self, text: str) -> str:
        """
        Drop a leading greeting; the assistant only greets when asked to.

        Args:
            text: Raw LLM response

        Returns:
            Cleaned response
        """
        if not text:
            return ""
        cleaned = _LEADING_GREETING.sub("", text.strip(), count=1)

        # A second greeting right after the first takes its whole line with it
        if re.match(_GREETING, cleaned, re.IGNORECASE):
            parts = re.split(r"\r?\n", cleaned, maxsplit=1)
            cleaned = parts[1] if len(parts) > 1 else ""
        return cleaned.strip()

    def process_response(self, text: str) -> str:
        """Clean a reply, keeping the raw text when cleaning would leave nothing."""
        cleaned = self.clean_response(text)
        return cleaned if cleaned else (text or "").strip()
