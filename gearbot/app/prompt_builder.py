#!/usr/bin/env python3
"""
Prompt builder module for the Gear9 chatbot.

This module builds the grounding context from the knowledge base and the
request payload sent to the fallback LLM.
"""

from typing import Any, Dict, List, Optional

from .config import Config
from ..data.models import KnowledgeBase
from ..nlu import rules
from ..nlu.entity_extractor import detect_sector, sector_matches

ANSWER_IN_ENGLISH = "Please answer in English only. Do not greet; reply concisely and professionally."
ANSWER_IN_FRENCH = "Réponds uniquement en français. Ne salue pas; réponds de manière concise et professionnelle."
ANSWER_IN_SAME_LANGUAGE = "Réponds dans la langue de la question (FR/EN). Ne salue pas; réponds de manière concise."

_EN_HINTS = ("hello", "hi", "what", "where", "who", "when", "how", "address", "services", "projects",
             "clients", "awards", "expertise", "overview", "about")
_FR_HINTS = ("bonjour", "salut", "adresse", "services", "projets", "clients", "récompenses", "recompenses",
             "expertise", "à propos", "apropos", "apercu", "où", "ou", "qui", "quels", "quelles")


class PromptBuilder:
    """Builds prompts for the LLM with company context and a language directive."""

    def __init__(self, system_prompt: Optional[str] = None):
        """Initialize the prompt builder."""
        self.system_prompt = system_prompt or Config.SYSTEM_PROMPT

    def language_instruction(self, question: str, language: Optional[str] = None) -> str:
        if language:
            return ANSWER_IN_ENGLISH if language.lower() == "en" else ANSWER_IN_FRENCH
        q = (question or "").lower()
        if any(w in q for w in _EN_HINTS):
            return ANSWER_IN_ENGLISH
        if any(w in q for w in _FR_HINTS):
            return ANSWER_IN_FRENCH
        return ANSWER_IN_SAME_LANGUAGE

    def build_context(self, question: str, kb: KnowledgeBase) -> Optional[str]:
        """
        Build a plain-text excerpt of the knowledge base relevant to the question.

        Args:
            question: Raw user question
            kb: Knowledge base to read from

        Returns:
            Context text, or None when there is nothing to ground on
        """
        if kb is None or kb.is_empty or not question or not question.strip():
            return None
        q = rules.normalize(question)
        limit = Config.MAX_CONTEXT_ITEMS
        lines: List[str] = []

        # Company basics are always included
        for label, value in (("Nom", kb.company_name), ("Adresse", kb.address),
                             ("À propos", kb.about), ("Aperçu", kb.overview)):
            if value:
                lines.append(f"{label}: {value}")

        if rules.contains_any(q, rules.CONTEXT_SERVICES):
            for s in [s for s in kb.services if s.name][:limit]:
                lines.append(f"Service: {s.name}" + (f" — {s.description}" if s.description else ""))

        if rules.contains_any(q, rules.CONTEXT_LEADERSHIP) and kb.leadership:
            leader = kb.leadership[0]
            if leader.role or leader.name:
                who = f"{leader.role}: {leader.name}" if leader.role and leader.name else (leader.role or leader.name)
                lines.append(f"Direction: {who}")

        if rules.contains_any(q, rules.CONTEXT_AWARDS):
            count = 0
            for a in kb.awards:
                parts = [str(p) for p in (a.title, a.year, a.location) if p]
                if parts:
                    lines.append("Récompense: " + " — ".join(parts))
                    count += 1
                    if count >= limit:
                        break

        if rules.contains_any(q, rules.CONTEXT_PROJECTS):
            sector = detect_sector(q)
            count = 0
            for p in kb.projects:
                if not sector_matches(p.sector, sector):
                    continue
                parts = [v for v in (p.name, p.type, p.description) if v]
                if parts:
                    lines.append("Projet: " + " — ".join(parts))
                    count += 1
                    if count >= limit:
                        break

        text = "\n".join(lines).strip()
        return text or None

    def build_user_text(self, question: str, context: Optional[str], language: Optional[str] = None) -> str:
        instruction = self.language_instruction(question, language)
        if context and context.strip():
            return f"{instruction}\n\nContext (company data):\n{context}\n\nQuestion:\n{question}"
        return f"{instruction}\n\n{question}"

    def build_payload(self, question: str, context: Optional[str], language: Optional[str] = None) -> Dict[str, Any]:
        """Gemini generateContent request body."""
        return {
            "system_instruction": {"parts": [{"text": self.system_prompt}]},
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": self.build_user_text(question, context, language)}],
                }
            ],
            "generationConfig": {
                "temperature": 0.6,
                "topP": 0.9,
                "topK": 40,
            },
        }
