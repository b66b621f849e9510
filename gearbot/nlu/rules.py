"""Rule-based matching utilities: normalization, keyword vocabularies and alias lookup."""
import re
import unicodedata
from typing import Dict, Iterable, List, Optional, Tuple


def normalize(text: Optional[str]) -> str:
    """Lower-case, trim and strip diacritics so accented and plain forms compare equal."""
    if not text:
        return ""
    lowered = text.lower().strip()
    decomposed = unicodedata.normalize("NFD", lowered)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _vocab(*words: str) -> Tuple[str, ...]:
    seen = []
    for w in words:
        n = normalize(w)
        if n and n not in seen:
            seen.append(n)
    return tuple(seen)


def contains_any(q: str, vocab: Iterable[str]) -> bool:
    for phrase in vocab:
        if phrase in q:
            return True
    return False


def contains_any_word(q: str, words: Iterable[str]) -> bool:
    """Like contains_any, but the match may not touch another letter on either side."""
    for w in words:
        if not w:
            continue
        if re.search(r"(?<![^\W\d_])" + re.escape(w) + r"(?![^\W\d_])", q):
            return True
    return False


def join_with_and(items: List[str], is_english: bool) -> str:
    if not items:
        return ""
    conj = "and" if is_english else "et"
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} {conj} {items[1]}"
    return ", ".join(items[:-1]) + f", {conj} {items[-1]}"


# Short tokens that only count as whole words ("ou" would otherwise match "about", "vous", "bonjour")
WHERE_WORDS = _vocab("où", "ou", "where")

COMPANY_RELATED = _vocab(
    # FR
    "gear9", "entreprise", "société", "adresse", "service", "projet", "client",
    "réalisation", "récompense", "pdg", "dirige", "direction", "expertise", "salesforce",
    "marketing cloud", "mulesoft", "tableau", "data cloud", "apropos", "à propos", "aperçu",
    "présentation", "qui êtes-vous", "qui etes vous", "localisation",
    # EN
    "company", "address", "services", "project", "client", "customer", "award",
    "achievement", "ceo", "leader", "director", "about", "overview", "where", "location",
)

ADDRESS = _vocab(
    # FR
    "adresse", "localisation", "située", "siège", "siège social",
    # EN
    "address", "location", "located", "headquarters", "hq", "office", "head office",
)

COMPANY_NAME = _vocab(
    "nom de l'entreprise", "nom de l'entr", "comment s'appelle", "qui êtes-vous", "qui etes vous",
    "présentez", "presentation",
    "company name", "what is the company name", "what's the company name",
)

ABOUT = _vocab(
    "c'est quoi gear9", "c est quoi gear9", "que fait gear9", "qui est gear9",
    "tell me about gear9",
)

SALESFORCE_STACK = _vocab(
    "salesforce", "sales cloud", "service cloud", "marketing cloud", "data cloud", "mulesoft", "tableau",
)
STAFF_AUGMENTATION = _vocab("régie", "staff augmentation")
DIGITAL = _vocab("digital")

# Shared by the alias fast-path and the about handler: a generic overview is skipped when these appear
SPECIFIC_TOPICS = SALESFORCE_STACK + STAFF_AUGMENTATION + _vocab(
    "digital", "product thinking", "customer experience", "automation",
)

SERVICES = _vocab(
    "service", "offre", "proposez", "proposés",
    "offer", "offering", "what do you offer", "what services",
)

LEADERSHIP = _vocab("pdg", "direction", "dirige", "dirigeant", "ceo", "leader", "director")

AWARDS = _vocab(
    "réalisation", "récompense", "prix", "exploits",
    "award", "achievement", "rewards",
)

PROJECTS = _vocab(
    "projet", "client", "référence",
    "project", "customer", "reference", "portfolio",
)

CORE_EXPERTISE = _vocab(
    "expertise principale", "expertises principales", "compétence principale",
    "what is the expertise of gear9", "what is the expertise of", "what is your expertise",
    "expertise", "core expertise", "main expertise", "primary expertise",
)

EXPERTISE_GENERIC = _vocab("expertise")

NAME_FALLBACK = _vocab("nom", "appelle", "appelez", "name")

IDENTITY = _vocab(
    "who are you", "who r u", "who're you", "who are u",
    "qui es-tu", "qui es tu", "qui êtes-vous", "qui etes vous", "tu es qui", "t'es qui",
)
IDENTITY_FILLERS = ("hey ", "hi ", "hello ", "ay ")

GREETING_REQUEST = _vocab("dis bonjour", "say hello")
GREETING_INTENT = _vocab(
    "adresse", "address", "service", "projet", "project", "client",
    "réalisation", "récompense", "exploits", "award", "achievement", "rewards", "expertise",
    "qui", "quoi", "comment", "quelle", "quels",
)
ENGLISH_GREETINGS = _vocab("hello", "hi", "hey")
GREETINGS = _vocab("salut", "bonjour", "hey", "hello", "hi")

# Context building (fallback responder) uses a narrower vocabulary than the matcher
CONTEXT_SERVICES = _vocab("service", "offre", "offers", "offerings")
CONTEXT_LEADERSHIP = _vocab("pdg", "direction", "ceo", "leader", "director")
CONTEXT_AWARDS = _vocab("réalisation", "récompense", "prix", "exploits", "award", "achievements", "rewards")
CONTEXT_PROJECTS = _vocab("projet", "client", "project", "portfolio", "reference")


def is_identity_query(q: str) -> bool:
    s = q.strip()
    for filler in IDENTITY_FILLERS:
        if s.startswith(filler):
            s = s[len(filler):]
            break
    if contains_any(s, IDENTITY):
        return True
    return "who" in s and "you" in s and (" are " in s or " r " in s)


def is_likely_greeting_only(q: str) -> bool:
    if "?" in q or len(q) > 24:
        return False
    return not (contains_any(q, GREETING_INTENT) or contains_any_word(q, WHERE_WORDS))


class AliasIndex:
    """Subject aliases from the knowledge base, normalized once, scanned in file order."""

    def __init__(self, aliases_by_subject: Dict[str, Iterable[str]]):
        self.entries: List[Tuple[str, Tuple[str, ...]]] = [
            (key, _vocab(*(aliases or []))) for key, aliases in (aliases_by_subject or {}).items()
        ]

    def matches(self, normalized_question: str) -> List[str]:
        """Keys of every subject with an alias inside the question, in file order."""
        return [key for key, aliases in self.entries if contains_any(normalized_question, aliases)]
