"""
Deterministic question answering over the company knowledge base.

The matcher runs a priority-ordered rule chain; the first rule that produces a
reply wins:

1. normalize the question (lower-case, trimmed, diacritics stripped)
2. alias fast-path over ``data.subjects``
3. identity question / explicitly requested greeting
4. topic gate for messages unrelated to the company
5. topic handlers (address, name, overview, services, leadership, awards,
   projects, expertises, name fallback)

It always returns a string; when nothing applies the reply is the localized
"no information" sentinel.
"""

from typing import Callable, Dict, Optional

from ..agents.base_agent import NO_INFO_TOPIC_EN, NO_INFO_FR, is_no_info, no_info
from ..agents.company_info_agent import CompanyInfoAgent
from ..agents.meta_agent import MetaAgent
from ..data.models import KnowledgeBase
from ..nlu import rules
from ..nlu.language import looks_english
from ..utils.logger import get_logger

logger = get_logger()


class Matcher:
    """Rule chain turning a question into a localized answer."""

    def __init__(self, knowledge_base: KnowledgeBase):
        self.kb = knowledge_base
        self.company = CompanyInfoAgent(knowledge_base)
        self.meta = MetaAgent()
        self.aliases = rules.AliasIndex({key: s.aliases for key, s in knowledge_base.subjects.items()})
        self.alias_handlers: Dict[str, Callable[[bool], Optional[str]]] = {
            "address": self.company.address,
            "services": self.company.services,
            "clients": self.company.projects,
            "awards": self.company.awards,
            "leadership": self.company.leadership,
            "expertise": self._expertise,
            "salesforce": lambda is_english: self.company.expertise_group(is_english, "salesforce"),
            "digital": lambda is_english: self.company.expertise_group(is_english, "digital"),
        }

    @staticmethod
    def is_no_info(text: Optional[str]) -> bool:
        return is_no_info(text)

    def answer(self, question: Optional[str], is_english: Optional[bool] = None) -> str:
        """
        Answer a question deterministically.

        Args:
            question: Raw user question
            is_english: Reply language; detected from the question when None

        Returns:
            A non-empty localized reply
        """
        if is_english is None:
            is_english = looks_english(question)

        if not question or not question.strip():
            return NO_INFO_TOPIC_EN if is_english else NO_INFO_FR

        try:
            return self._answer(rules.normalize(question), is_english)
        except Exception:
            logger.exception(f"[MATCHER] Rule chain failed for question {question!r}")
            return no_info(is_english)

    def _answer(self, q: str, is_english: bool) -> str:
        reply = self.match_alias(q, is_english)
        if reply:
            logger.debug(f"[MATCHER] alias fast-path answered {q!r}")
            return reply

        reply = self.meta.handle(q, is_english)
        if reply:
            return reply

        if self.kb.is_empty:
            return NO_INFO_TOPIC_EN if is_english else NO_INFO_FR

        if not self.meta.is_company_related(q):
            return self.meta.off_topic(q, is_english)

        return self.company.handle(q, is_english) or no_info(is_english)

    def match_alias(self, q: str, is_english: bool) -> Optional[str]:
        """Reply for the first subject whose alias appears in the normalized question."""
        for key in self.aliases.matches(q):
            subject = self.kb.subjects[key]
            custom = subject.answer(is_english or looks_english(q))
            if custom:
                return custom

            if key == "about":
                if rules.contains_any(q, rules.SPECIFIC_TOPICS):
                    # a more specific subject or the main chain decides
                    continue
                return self.company.overview(is_english)

            handler = self.alias_handlers.get(key)
            if handler is None:
                return self.company.overview(is_english)
            return handler(is_english) or no_info(is_english)
        return None

    def _expertise(self, is_english: bool) -> Optional[str]:
        return (self.company.core_expertises(is_english)
                or self.company.expertise_summary(is_english)
                or self.company.expertise_group(is_english))

    def subjects(self):
        return self.kb.subjects_list()
