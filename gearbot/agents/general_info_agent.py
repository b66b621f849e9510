"""General Info Agent: canned replies for the most common questions.

Tried after the matcher and before the fallback API, so frequent questions
never cost a network round-trip.
"""
from typing import Optional

from .base_agent import BaseAgent
from .company_info_agent import OVERVIEW_EN, OVERVIEW_FR

ADDRESS_EN = "**Gear9**'s address: 219 Bd Zerktouni, angle Bd Brahim Roudani, Casablanca"
ADDRESS_FR = "Adresse de **Gear9** : 219 Bd Zerktouni, angle Bd Brahim Roudani, Casablanca"
AGENCY_EN = ("**Gear9** is an agency specializing in Salesforce Digital Staff Augmentation. We help companies with "
             "digital transformation, Salesforce implementation, and creating engaging digital experiences.")
AGENCY_FR = ("**Gear9** est une agence spécialisée dans la Régie Salesforce Digital. Nous aidons les entreprises dans "
             "leur transformation digitale, l'implémentation Salesforce et la création d'expériences digitales engageantes.")


class GeneralInfoAgent(BaseAgent):
    name = "general_info"

    def handle(self, question: str, is_english: bool) -> Optional[str]:
        q = (question or "").lower().strip()

        if "gear9" in q and ("quoi" in q or "what" in q):
            return OVERVIEW_EN if is_english else OVERVIEW_FR

        if any(w in q for w in ("adresse", "address", "où", "where")):
            return ADDRESS_EN if is_english else ADDRESS_FR

        if any(w in q for w in ("entreprise", "company", "société")):
            return AGENCY_EN if is_english else AGENCY_FR

        return None
