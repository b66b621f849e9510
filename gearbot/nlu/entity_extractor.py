"""Very small rule-based entity extractor for company questions (years, sectors)."""
import re
from typing import Dict, Any, Optional

from .rules import normalize

YEAR_RE = re.compile(r"(?<!\d)(19\d{2}|20\d{2})(?!\d)")

# sector keyword (as it may appear in a question) -> sector value as stored in the knowledge base
SECTOR_KEYWORDS = {
    # FR
    "secteur public": "secteur public",
    "finance": "finance",
    "assurance": "assurance",
    "télécom": "télécom",
    "telecom": "télécom",
    "retail": "retail",
    "industrie": "industrie",
    "education": "education",
    "éducation": "education",
    "hôtellerie": "hôtellerie",
    "hotellerie": "hôtellerie",
    "immobilier": "immobilier",
    # EN
    "public sector": "secteur public",
    "insurance": "assurance",
    "telecommunications": "télécom",
    "telecommunication": "télécom",
    "industry": "industrie",
    "hospitality": "hôtellerie",
    "real estate": "immobilier",
}


def extract_year(text: str) -> Optional[int]:
    """First standalone 4-digit year in [1900, 2100], or None."""
    if not text:
        return None
    m = YEAR_RE.search(text)
    if m:
        year = int(m.group(1))
        if 1900 <= year <= 2100:
            return year
    return None


def detect_sector(text: str) -> Optional[str]:
    """Canonical sector value for the first sector keyword found in the question."""
    q = normalize(text)
    for keyword, sector in SECTOR_KEYWORDS.items():
        if normalize(keyword) in q:
            return sector
    return None


def sector_matches(stored_sector: Optional[str], wanted: Optional[str]) -> bool:
    if wanted is None:
        return True
    if not stored_sector:
        return False
    return normalize(wanted) in normalize(stored_sector)


class EntityExtractor:
    def extract(self, text: str) -> Dict[str, Any]:
        entities = {}
        year = extract_year(text)
        if year is not None:
            entities["year"] = year
        sector = detect_sector(text)
        if sector is not None:
            entities["sector"] = sector
        return entities
