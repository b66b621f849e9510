"""Keyword-scored French/English language detection.

Two scoring tables live here. ``CONVERSATION_PROFILE`` is the canonical one and
decides the sticky language of a conversation. ``KEYWORD_PROFILE`` counts every
cue word and is what the matcher uses to decide whether a question "looks
English" when serving alias answers. Both run through the same detector.
"""
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

ENGLISH = "en"
FRENCH = "fr"
SUPPORTED_LANGUAGES = (ENGLISH, FRENCH)


def coerce_language(value: Optional[str]) -> Optional[str]:
    """Return "en"/"fr" for a valid language code (any case), else None."""
    if not value:
        return None
    lang = value.strip().lower()
    return lang if lang in SUPPORTED_LANGUAGES else None


@dataclass(frozen=True)
class LanguageProfile:
    name: str
    english_cues: Tuple[str, ...]
    french_cues: Tuple[str, ...]
    # True: one point per contained cue; False: cue_weight once if any cue is contained
    count_each_cue: bool = False
    cue_weight: int = 1
    accent_pattern: Optional[str] = None
    accent_weight: int = 0
    english_stopwords: Tuple[str, ...] = ()
    french_stopwords: Tuple[str, ...] = ()
    stopword_weight: int = 0
    ascii_english_cues: Tuple[str, ...] = ()
    ascii_weight: int = 0
    english_wins_ties: bool = False
    english_tiebreakers: Tuple[str, ...] = ()
    french_tiebreakers: Tuple[str, ...] = ()
    french_prefix: Optional[str] = None
    english_prefix: Optional[str] = None
    default: str = FRENCH


CONVERSATION_PROFILE = LanguageProfile(
    name="conversation",
    english_cues=("hello", "hi", "hey", "what", "where", "when", "who", "how", "why",
                  "address", "company", "about", "overview"),
    french_cues=("bonjour", "salut", "bonsoir", "quoi", "où", "ou ", "qui", "quand", "comment", "pourquoi",
                 "adresse", "entreprise", "société", "societe", "à propos", "apropos"),
    cue_weight=3,
    accent_pattern=r"[éèêàùâîïôç]",
    accent_weight=2,
    english_stopwords=(" the ", " and ", " of ", " in ", " to ", " for "),
    french_stopwords=(" le ", " la ", " les ", " des ", " du ", " et "),
    stopword_weight=1,
    ascii_english_cues=("what", "services", "provided", "by", "address", "company"),
    ascii_weight=2,
    english_tiebreakers=("address", "where"),
    french_tiebreakers=("adresse", "où", "ou "),
)

KEYWORD_PROFILE = LanguageProfile(
    name="keyword",
    english_cues=("what", "who", "where", "how", "company", "address", "service", "project", "client",
                  "award", "expertise", "hello", "hi", "about", "overview", "leader", "director",
                  "customer", "customers", "achievement", "achievements"),
    french_cues=("quoi", "qui", "où", "ou", "comment", "entreprise", "adresse", "service", "projet",
                 "client", "récompense", "expertise", "bonjour", "salut", "présentation", "présentez",
                 "dirige", "direction", "réalisation", "réalisations", "apropos", "à propos", "apercu"),
    count_each_cue=True,
    english_wins_ties=True,
    french_prefix=r"^(le|la|les|un|une|des|est|être|vous|nous|bonjour|merci|salut)",
    english_prefix=r"^(what|who|where|how|hello|hi|about)",
)


class LanguageDetector:
    """Scores a message against a LanguageProfile and returns "en" or "fr"; never raises."""

    def __init__(self, profile: LanguageProfile = CONVERSATION_PROFILE):
        self.profile = profile

    def score(self, text: str) -> Tuple[int, int]:
        p = self.profile
        t = text.lower().strip()
        if p.count_each_cue:
            en = sum(1 for w in p.english_cues if w in t)
            fr = sum(1 for w in p.french_cues if w in t)
        else:
            en = p.cue_weight if any(w in t for w in p.english_cues) else 0
            fr = p.cue_weight if any(w in t for w in p.french_cues) else 0

        if p.accent_pattern and re.search(p.accent_pattern, t):
            fr += p.accent_weight

        if any(w in t for w in p.english_stopwords):
            en += p.stopword_weight
        if any(w in t for w in p.french_stopwords):
            fr += p.stopword_weight

        if p.ascii_english_cues and t.isascii() and any(w in t for w in p.ascii_english_cues):
            en += p.ascii_weight

        return en, fr

    def detect(self, text: Optional[str]) -> str:
        p = self.profile
        if not text or not text.strip():
            return p.default
        t = text.lower().strip()
        en, fr = self.score(t)

        if en == 0 and fr == 0:
            if p.french_prefix and re.match(p.french_prefix, t):
                return FRENCH
            if p.english_prefix and re.match(p.english_prefix, t):
                return ENGLISH
        elif en > fr:
            return ENGLISH
        elif fr > en:
            return FRENCH
        elif p.english_wins_ties:
            return ENGLISH

        if any(w in t for w in p.english_tiebreakers):
            return ENGLISH
        if any(w in t for w in p.french_tiebreakers):
            return FRENCH
        return p.default

    def is_english(self, text: Optional[str]) -> bool:
        return self.detect(text) == ENGLISH


_conversation_detector = LanguageDetector(CONVERSATION_PROFILE)
_keyword_detector = LanguageDetector(KEYWORD_PROFILE)


def detect_language(text: Optional[str]) -> str:
    return _conversation_detector.detect(text)


def looks_english(text: Optional[str]) -> bool:
    return _keyword_detector.is_english(text)
