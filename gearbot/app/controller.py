"""Controller / Orchestrator: resolve the reply language and route a message through the answer layers.

Layers are tried in order: the deterministic matcher, the canned replies of the
general info agent, then the generative fallback grounded on knowledge base context.
"""
from typing import List, Optional

from .generate import GenerationClient, GenerationError
from .matcher import Matcher
from .prompt_builder import PromptBuilder
from .session import ConversationLanguageStore
from ..agents.general_info_agent import GeneralInfoAgent
from ..data.knowledge_base import get_knowledge_base
from ..data.models import KnowledgeBase
from ..nlu.language import ENGLISH
from ..utils.logger import get_logger

logger = get_logger()

TECHNICAL_DIFFICULTIES_EN = ("I'm sorry, I'm currently experiencing technical difficulties. Please try asking about "
                             "Gear9's address, services, projects, clients, awards, or expertise.")
TECHNICAL_DIFFICULTIES_FR = ("Je suis désolé, je rencontre actuellement des difficultés techniques. Veuillez essayer "
                             "de demander l'adresse, les services, les projets, les clients, les distinctions ou "
                             "l'expertise de Gear9.")


class Controller:
    def __init__(self, knowledge_base: Optional[KnowledgeBase] = None,
                 store: Optional[ConversationLanguageStore] = None,
                 generator: Optional[GenerationClient] = None,
                 matcher: Optional[Matcher] = None):
        self.kb = knowledge_base if knowledge_base is not None else get_knowledge_base()
        self.store = store or ConversationLanguageStore()
        self.matcher = matcher or Matcher(self.kb)
        self.general_info = GeneralInfoAgent()
        self.builder = PromptBuilder()
        self._generator = generator

    @property
    def generator(self) -> GenerationClient:
        # Created on first use so the deterministic layers run without any API setup
        if self._generator is None:
            self._generator = GenerationClient()
        return self._generator

    def handle_message(self, message: str, conversation_id: Optional[str] = None,
                       language: Optional[str] = None) -> str:
        """
        Produce the reply for one chat message.

        Args:
            message: The user's message
            conversation_id: Conversation identifier used to keep the reply language
            language: Explicit language requested by the client ("en"/"fr")

        Returns:
            The reply text; never raises for a failing fallback API
        """
        lang = self.store.resolve(conversation_id, message, language)
        is_english = lang == ENGLISH
        logger.info(f"[CONTROLLER] conversation={conversation_id} language={lang}")

        direct = self.matcher.answer(message, is_english)
        if not Matcher.is_no_info(direct):
            logger.info("[CONTROLLER] answered by matcher")
            return direct

        basic = self.general_info.handle(message, is_english)
        if basic:
            logger.info("[CONTROLLER] answered by general info agent")
            return basic

        try:
            context = self.builder.build_context(message, self.kb)
            reply = self.generator.generate_reply(message, context, lang)
            logger.info("[CONTROLLER] answered by generative fallback")
            return reply
        except GenerationError as e:
            logger.error(f"[CONTROLLER] Fallback generation failed: {e}")
            return TECHNICAL_DIFFICULTIES_EN if is_english else TECHNICAL_DIFFICULTIES_FR

    def subjects(self) -> List[str]:
        return self.matcher.subjects()

    def forget(self, conversation_id: str) -> bool:
        return self.store.forget(conversation_id)
