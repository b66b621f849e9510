"""Meta Agent: identity questions, explicit greetings and off-topic messages."""
from typing import Optional

from .base_agent import BaseAgent
from ..nlu import rules

IDENTITY_EN = "I am Gear9's assistant, here to help you with any information you need about Gear9."
IDENTITY_FR = "Je suis l'assistant de Gear9, là pour vous aider avec toutes les informations dont vous avez besoin sur Gear9."

MENU_GREETING_EN = "Hello! Ask me anything about Gear9 (address, services, projects, awards, expertise, etc.)."
MENU_NUDGE_EN = "I can help with Gear9: address, services, expertises, projects, clients and awards. What would you like to know?"
MENU_NUDGE_FR = ("Je peux vous renseigner sur Gear9 : adresse, services, expertises, projets, clients et distinctions. "
                 "Que souhaitez-vous savoir ?")
OUT_OF_DOMAIN_EN = "I'm sorry, I can only answer questions related to this company."
OUT_OF_DOMAIN_FR = "Je suis désolé, je ne peux répondre qu'aux questions en rapport avec l'entreprise."


class MetaAgent(BaseAgent):
    name = "meta"

    def handle(self, question: str, is_english: bool) -> Optional[str]:
        """Identity and explicit-greeting replies; the question must already be normalized."""
        if rules.is_identity_query(question):
            return IDENTITY_EN if is_english else IDENTITY_FR

        # Plain greetings are not answered with a greeting; only an explicit request is
        if rules.is_likely_greeting_only(question) and rules.contains_any(question, rules.GREETING_REQUEST):
            return "Hello!" if is_english else "Bonjour !"
        return None

    @staticmethod
    def is_company_related(question: str) -> bool:
        return (rules.contains_any(question, rules.COMPANY_RELATED)
                or rules.contains_any_word(question, rules.WHERE_WORDS))

    def off_topic(self, question: str, is_english: bool) -> str:
        """Reply for a message that mentions nothing about the company."""
        if is_english and rules.contains_any(question, rules.ENGLISH_GREETINGS):
            return MENU_GREETING_EN
        if len(question) < 16 or rules.contains_any(question, rules.GREETINGS):
            return MENU_NUDGE_EN if is_english else MENU_NUDGE_FR
        return OUT_OF_DOMAIN_EN if is_english else OUT_OF_DOMAIN_FR
