"""English patches for projects whose data entry lacks ``*_en`` fields.

Applied only to fields that are still empty after localization, and only for
English replies. Remove an entry once the data file carries its translation.
"""
from typing import Dict

ENGLISH_PROJECT_OVERRIDES: Dict[str, Dict[str, str]] = {
    "groupe_ocp": {"type": "Salesforce"},
    "sorec": {"type": "Digital asset redesign strategy"},
    "bank_of_africa": {
        "type": "Digital Customer Experience",
        "description": "Redefinition of the group's digital customer journey",
    },
    "bank_alyousr": {
        "type": "Marketing Automation",
        "description": "Addressing this major challenge, Bank Al Yousr…",
    },
    "attijariwafa_bank": {"type": "Digitalization of the FIAD platform"},
    "bmce_capital_bourse": {"type": "Stock market activity management platform"},
}
