"""BaseAgent interface for all agents."""
from abc import ABC, abstractmethod
from typing import Optional

NO_INFO_EN = "I'm sorry, I don't have information on this."
NO_INFO_FR = "Je suis désolé, je ne trouve pas d'information à ce sujet."
NO_INFO_TOPIC_EN = "I'm sorry, I don't have information on this topic."

# Every "nothing found" reply starts with one of these
NO_INFO_PREFIXES = ("I'm sorry", "Je suis désolé")


def no_info(is_english: bool) -> str:
    return NO_INFO_EN if is_english else NO_INFO_FR


def is_no_info(text: Optional[str]) -> bool:
    return not text or text.startswith(NO_INFO_PREFIXES)


class BaseAgent(ABC):
    name: str = "base"

    @abstractmethod
    def handle(self, question: str, is_english: bool) -> Optional[str]:
        """Return a localized reply, or None when this agent has nothing to say."""
        ...

    def _no_info(self, is_english: bool) -> str:
        return no_info(is_english)
