"""Company Info Agent: deterministic answers about the company from the knowledge base.

Each topic has its own handler method so the alias fast-path and the main rule
chain can call them directly. Handlers return a localized sentence, the
"no information" sentinel when the topic is known but the data is missing, or
None when they have nothing to contribute and the next rule should run.
"""
from typing import Any, Dict, List, Optional

from .base_agent import BaseAgent
from .project_overrides import ENGLISH_PROJECT_OVERRIDES
from ..app.config import Config
from ..data.models import KnowledgeBase, Offering, Project, localized
from ..nlu import rules
from ..nlu.entity_extractor import EntityExtractor, sector_matches

OVERVIEW_EN = (
    "**Gear9** is a Moroccan digital transformation agency founded in 2019. We specialize in implementing "
    "digital culture, creating unique and engaging digital experiences, and using technology and data to drive "
    "business growth. We operate with an agile and innovative methodology, focusing on areas such as Digital "
    "Culture and Transformation, Product Thinking, Customer Experience and Automation, as well as Behavioral Analysis."
)
OVERVIEW_FR = (
    "**Gear9** est une agence marocaine de transformation digitale fondée en 2019. Elle se spécialise dans la mise "
    "en œuvre de la culture digitale, la création d'expériences digitales uniques et engageantes, et l'utilisation "
    "de la technologie et des données pour stimuler la croissance des entreprises. L'agence opère avec une "
    "méthodologie agile et innovante, se concentrant sur des domaines tels que la Culture et la Transformation "
    "Digitale, le Product Thinking, l'Expérience Client et l'Automatisation, ainsi que l'Analyse Comportementale."
)

GROUP_LABELS = {
    "salesforce": ("Salesforce", "Salesforce"),
    "regie": ("staff augmentation", "régie"),
    "digital": ("digital", "digital"),
}


def _group_label(group_id: Optional[str], fallback: str, is_english: bool) -> str:
    labels = GROUP_LABELS.get((group_id or "").lower())
    if labels:
        return labels[0] if is_english else labels[1]
    return fallback


def _offering_phrase(entry: Offering, is_english: bool) -> Optional[str]:
    name = localized(entry, "name", is_english)
    if not name:
        return None
    description = localized(entry, "description", is_english)
    return f"{name}: {description}" if description else name


class CompanyInfoAgent(BaseAgent):
    name = "company_info"

    def __init__(self, knowledge_base: KnowledgeBase):
        self.kb = knowledge_base
        self.entity_extractor = EntityExtractor()

    @property
    def brand(self) -> str:
        return self.kb.company_name or "Gear9"

    def handle(self, question: str, is_english: bool) -> Optional[str]:
        """Run the topic handlers in priority order on an already normalized question."""
        q = question
        entities = self.entity_extractor.extract(q)

        if rules.contains_any(q, rules.ADDRESS) or rules.contains_any_word(q, rules.WHERE_WORDS):
            return self.address(is_english)

        if rules.contains_any(q, rules.COMPANY_NAME):
            reply = self.company_name(is_english)
            if reply:
                return reply

        if rules.contains_any(q, rules.ABOUT) and not rules.contains_any(q, rules.SPECIFIC_TOPICS):
            return self.overview(is_english)

        if rules.contains_any(q, rules.SERVICES):
            return self.services(is_english)

        if rules.contains_any(q, rules.LEADERSHIP):
            return self.leadership(is_english)

        if rules.contains_any(q, rules.AWARDS):
            return self.awards(is_english, since=entities.get("year"))

        if rules.contains_any(q, rules.PROJECTS):
            return self.projects(is_english, sector=entities.get("sector"))

        group_id = self.detect_group(q)
        if rules.contains_any(q, rules.CORE_EXPERTISE) and group_id is None:
            reply = self.core_expertises(is_english)
            if reply:
                return reply

        if group_id is None and rules.contains_any(q, rules.EXPERTISE_GENERIC):
            reply = self.expertise_summary(is_english)
            if reply:
                return reply

        reply = self.expertise_group(is_english, group_id)
        if reply:
            return reply

        if rules.contains_any(q, rules.NAME_FALLBACK):
            reply = self.company_name(is_english)
            if reply:
                return reply

        return self._no_info(is_english)

    @staticmethod
    def detect_group(q: str) -> Optional[str]:
        if rules.contains_any(q, rules.SALESFORCE_STACK):
            return "salesforce"
        if rules.contains_any(q, rules.STAFF_AUGMENTATION):
            return "regie"
        if rules.contains_any(q, rules.DIGITAL):
            return "digital"
        return None

    # -- topic handlers ---------------------------------------------------

    def address(self, is_english: bool) -> str:
        if not self.kb.address:
            return self._no_info(is_english)
        header = f"Address of **{self.brand}**:\n" if is_english else f"Adresse de **{self.brand}**:\n"
        return header + self.kb.address

    def company_name(self, is_english: bool) -> Optional[str]:
        if not self.kb.company_name:
            return None
        header = f"Company name of **{self.brand}**:\n" if is_english else f"Nom de **{self.brand}**:\n"
        return header + self.kb.company_name

    def overview(self, is_english: bool) -> str:
        # Fixed text; the data file's overview only feeds the fallback context
        return OVERVIEW_EN if is_english else OVERVIEW_FR

    def services(self, is_english: bool) -> str:
        names: List[str] = []
        snippets: List[str] = []
        for s in self.kb.services:
            name = localized(s, "name", is_english)
            if not name:
                continue
            names.append(name)
            description = localized(s, "description", is_english)
            if description:
                snippets.append(f"{name}: {description}")
            if len(names) >= Config.MAX_LISTED_ITEMS:
                break
        if not names:
            return self._no_info(is_english)

        lead = f"{self.brand} offers services such as " if is_english else f"{self.brand} propose des services tels que "
        sentence = lead + rules.join_with_and(names, is_english) + "."
        if snippets:
            sentence += (" For example: " if is_english else " Par exemple : ") + "; ".join(snippets) + "."
        return sentence

    def leadership(self, is_english: bool) -> str:
        if not self.kb.leadership:
            return self._no_info(is_english)
        leader = self.kb.leadership[0]
        if not leader.role and not leader.name:
            return self._no_info(is_english)
        who = " ".join(p for p in (leader.role, leader.name) if p)
        if is_english:
            return f"{self.brand} is led by {who}."
        return f"{self.brand} est dirigée par {who}."

    def awards(self, is_english: bool, since: Optional[int] = None) -> str:
        phrases: List[str] = []
        for award in self.kb.awards:
            if since is not None and award.year is not None and award.year < since:
                continue
            parts = [str(p) for p in (award.title, award.year, award.location) if p]
            if parts:
                phrases.append(", ".join(parts))
        if not phrases:
            return self._no_info(is_english)

        if since is not None:
            lead = (f"Awards and achievements since {since} include " if is_english
                    else f"Depuis {since}, parmi les distinctions, citons ")
        else:
            lead = "Recent awards and achievements include " if is_english else "Parmi les distinctions récentes, citons "
        return lead + rules.join_with_and(phrases, is_english) + "."

    def project_fields(self, project: Project, is_english: bool) -> List[str]:
        """Name, type and description of a project as shown in replies."""
        if is_english:
            patch: Dict[str, Any] = ENGLISH_PROJECT_OVERRIDES.get(project.id or "", {})
            type_ = project.type_en or patch.get("type") or project.type
            desc = project.description_en or patch.get("description") or project.description
            if not type_ and not desc:
                type_ = project.sector
                desc = project.url
        else:
            type_ = project.type
            desc = project.description

        parts = [p for p in (project.name, type_, desc) if p]
        if is_english and len(parts) == 1:
            parts.append(project.sector or "Project")
        return parts

    def projects(self, is_english: bool, sector: Optional[str] = None) -> str:
        separator = " - " if is_english else " — "
        items: List[str] = []
        for p in self.kb.projects:
            if not sector_matches(p.sector, sector):
                continue
            parts = self.project_fields(p, is_english)
            if parts:
                items.append(separator.join(parts))
            if len(items) >= Config.MAX_LISTED_ITEMS:
                break
        if not items:
            return self._no_info(is_english)
        lead = "Some client projects include " if is_english else "Parmi nos projets clients, citons "
        return lead + rules.join_with_and(items, is_english) + "."

    def core_expertises(self, is_english: bool) -> Optional[str]:
        phrases = [p for p in (_offering_phrase(e, is_english) for e in self.kb.core_expertises) if p]
        if not phrases:
            return None
        lead = "Our main expertises include " if is_english else "Nos expertises principales incluent "
        return lead + rules.join_with_and(phrases, is_english) + "."

    def expertise_summary(self, is_english: bool) -> Optional[str]:
        """One line per expertise group listing its first few detail names."""
        summaries: List[str] = []
        for g in self.kb.expertise_groups:
            names = [n for n in (localized(d, "name", is_english) for d in g.details) if n]
            names = names[:Config.MAX_GROUP_DETAILS]
            if not names:
                continue
            label = _group_label(g.id, g.name or "expertise", is_english)
            sep = ": " if is_english else " : "
            summaries.append(label + sep + rules.join_with_and(names, is_english))
        if not summaries:
            return None
        lead = "Our expertises cover " if is_english else "Nos expertises couvrent "
        return lead + rules.join_with_and(summaries, is_english) + "."

    def expertise_group(self, is_english: bool, group_id: Optional[str] = None) -> Optional[str]:
        group = self.kb.group(group_id) if group_id else None
        if group is None and self.kb.expertise_groups:
            group = self.kb.expertise_groups[0]
        if group is None:
            return None

        phrases = [p for p in (_offering_phrase(d, is_english) for d in group.details) if p]
        if not phrases:
            return None
        label = _group_label(group.id, group.name or "", is_english)
        if is_english:
            lead = f"Details of our {label} expertise include " if label else "Details of this expertise include "
        else:
            lead = (f"Parmi les détails de notre expertise {label}, on retrouve " if label
                    else "Parmi les détails de cette expertise, on retrouve ")
        return lead + rules.join_with_and(phrases, is_english) + "."
