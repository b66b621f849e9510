"""Pydantic models for the company knowledge base.

Attribute names are English; the data file keeps its French keys,
which are accepted as aliases (``nom`` -> ``name``, ``projets`` -> ``projects``...).
Blank strings are read as missing values.
"""
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Offering(_Record):
    """A service, a core expertise or an expertise-group detail."""
    name: Optional[str] = Field(default=None, alias="nom")
    name_en: Optional[str] = Field(default=None, alias="nom_en")
    description: Optional[str] = None
    description_en: Optional[str] = None
    category: Optional[str] = Field(default=None, alias="categorie")


class Leader(_Record):
    role: Optional[str] = None
    name: Optional[str] = Field(default=None, alias="nom")


class Award(_Record):
    title: Optional[str] = Field(default=None, alias="titre")
    year: Optional[int] = Field(default=None, alias="annee")
    location: Optional[str] = Field(default=None, alias="lieu")

    @field_validator("year", mode="before")
    @classmethod
    def _lenient_year(cls, value: Any) -> Any:
        # An unreadable year makes the award undated instead of rejecting the file
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None


class Project(_Record):
    id: Optional[str] = None
    name: Optional[str] = Field(default=None, alias="nom")
    sector: Optional[str] = Field(default=None, alias="secteur")
    type: Optional[str] = None
    type_en: Optional[str] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    url: Optional[str] = None


class ExpertiseGroup(_Record):
    id: Optional[str] = None
    name: Optional[str] = Field(default=None, alias="nom")
    details: Tuple[Offering, ...] = ()


class Subject(_Record):
    aliases: Tuple[str, ...] = ()
    answer_en: Optional[str] = None
    answer_fr: Optional[str] = None

    @field_validator("aliases", mode="before")
    @classmethod
    def _lenient_aliases(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)):
            return tuple(a for a in value if isinstance(a, str))
        return ()

    def answer(self, is_english: bool) -> Optional[str]:
        return self.answer_en if is_english else self.answer_fr


def localized(entry: Any, field: str, is_english: bool) -> Optional[str]:
    """``<field>_en`` when English is requested and present, else the base field."""
    if entry is None:
        return None
    if is_english:
        en = getattr(entry, f"{field}_en", None)
        if en:
            return en
    return getattr(entry, field, None)


class KnowledgeBase(_Record):
    company_name: Optional[str] = Field(default=None, alias="nom_entreprise")
    address: Optional[str] = Field(default=None, alias="adresse")
    about: Optional[str] = Field(default=None, alias="apropos")
    overview: Optional[str] = Field(default=None, alias="apercu")
    services: Tuple[Offering, ...] = ()
    leadership: Tuple[Leader, ...] = Field(default=(), alias="direction")
    awards: Tuple[Award, ...] = Field(default=(), alias="realisations_et_recompenses")
    projects: Tuple[Project, ...] = Field(default=(), alias="projets")
    core_expertises: Tuple[Offering, ...] = Field(default=(), alias="expertise_principale")
    expertise_groups: Tuple[ExpertiseGroup, ...] = Field(default=(), alias="expertise")
    subjects: Dict[str, Subject] = Field(default_factory=dict)
    loaded: bool = False

    @field_validator("services", "leadership", "awards", "projects", "core_expertises", "expertise_groups",
                     mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("subjects", mode="before")
    @classmethod
    def _null_subjects(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def empty(cls) -> "KnowledgeBase":
        return cls()

    @classmethod
    def from_document(cls, document: Any) -> "KnowledgeBase":
        """Build from the parsed data file; a document without a ``data`` object is empty."""
        if not isinstance(document, dict) or not isinstance(document.get("data"), dict):
            return cls.empty()
        return cls.model_validate({**document["data"], "loaded": True})

    @property
    def is_empty(self) -> bool:
        return not self.loaded

    def group(self, group_id: str) -> Optional[ExpertiseGroup]:
        for g in self.expertise_groups:
            if g.id == group_id:
                return g
        return None

    def subjects_list(self) -> List[str]:
        """Deduplicated, insertion-ordered topic labels for client-side autocomplete."""
        labels: Dict[str, None] = {}

        def add(*values: Optional[str]) -> None:
            for v in values:
                if v:
                    labels.setdefault(v, None)

        if self.is_empty:
            return []

        add(self.company_name)
        if self.address:
            add("Address")
        if self.about:
            add("About")
        for s in self.services:
            add(s.name, s.name_en, s.category)
        for e in self.core_expertises:
            add(e.name, e.category)
        for g in self.expertise_groups:
            add(g.name)
            for d in g.details:
                add(d.name)
        for p in self.projects:
            add(p.sector, p.name, p.type, p.type_en)
        for a in self.awards:
            add(a.title)
        for d in self.leadership:
            add(d.role)
        return list(labels)
