#!/usr/bin/env python3
"""
Knowledge Base Tests

PURPOSE:
    Covers reading the company data file: French keys mapped onto the models,
    blank values, the loader's fallback order and the subjects listing used
    for autocomplete.

USAGE:
    Run from project root: python -m pytest tests/test_knowledge_base.py -v
"""

import sys
import os
import json
import tempfile
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from gearbot.app.config import Config
from gearbot.data import knowledge_base
from gearbot.data.knowledge_base import BUNDLED_PATH, load_knowledge_base
from gearbot.data.models import KnowledgeBase, Offering, localized


def make_kb(**data):
    return KnowledgeBase.from_document({"data": data})


class TestKnowledgeBaseModel(unittest.TestCase):

    def test_french_keys_are_mapped(self):
        kb = make_kb(
            nom_entreprise="Gear9",
            adresse="Casablanca",
            services=[{"nom": "Régie", "nom_en": "Staff augmentation", "categorie": "RH"}],
            direction=[{"role": "CEO", "nom": "Jane Doe"}],
            realisations_et_recompenses=[{"titre": "Award", "annee": 2022, "lieu": "Paris"}],
            projets=[{"id": "p1", "nom": "Acme", "secteur": "Retail"}],
            expertise=[{"id": "digital", "nom": "Digital", "details": [{"nom": "UX"}]}],
        )
        self.assertFalse(kb.is_empty)
        self.assertEqual(kb.company_name, "Gear9")
        self.assertEqual(kb.services[0].name_en, "Staff augmentation")
        self.assertEqual(kb.services[0].category, "RH")
        self.assertEqual(kb.leadership[0].name, "Jane Doe")
        self.assertEqual(kb.awards[0].year, 2022)
        self.assertEqual(kb.projects[0].sector, "Retail")
        self.assertEqual(kb.group("digital").details[0].name, "UX")
        self.assertIsNone(kb.group("regie"))

    def test_blank_strings_are_missing(self):
        entry = Offering.model_validate({"nom": "Sales Cloud", "description": "  ", "nom_en": ""})
        self.assertIsNone(entry.description)
        self.assertIsNone(entry.name_en)

    def test_document_without_data_is_empty(self):
        self.assertTrue(KnowledgeBase.from_document({}).is_empty)
        self.assertTrue(KnowledgeBase.from_document([]).is_empty)
        self.assertTrue(KnowledgeBase.empty().is_empty)

    def test_localized_prefers_english_only_when_asked(self):
        entry = Offering(name="Régie", name_en="Staff augmentation", description="consultants")
        self.assertEqual(localized(entry, "name", True), "Staff augmentation")
        self.assertEqual(localized(entry, "name", False), "Régie")
        # no English description: base field
        self.assertEqual(localized(entry, "description", True), "consultants")
        french_missing = Offering(name_en="Only English")
        self.assertIsNone(localized(french_missing, "name", False))

    def test_subjects_list_order_and_dedup(self):
        kb = make_kb(
            nom_entreprise="Gear9",
            adresse="Casablanca",
            apropos="Agence digitale",
            services=[
                {"nom": "Salesforce", "nom_en": "Salesforce", "categorie": "CRM"},
                {"nom": "Régie", "categorie": "CRM"},
            ],
            expertise_principale=[{"nom": "Product Thinking", "categorie": "Produit"}],
            expertise=[{"nom": "Digital", "details": [{"nom": "UX"}, {"nom": "Salesforce"}]}],
            projets=[{"nom": "Acme", "secteur": "Retail", "type": "CRM"}],
            realisations_et_recompenses=[{"titre": "Best Partner"}],
            direction=[{"role": "CEO"}],
        )
        self.assertEqual(kb.subjects_list(), [
            "Gear9", "Address", "About", "Salesforce", "CRM", "Régie",
            "Product Thinking", "Produit", "Digital", "UX", "Retail", "Acme",
            "Best Partner", "CEO",
        ])

    def test_subjects_list_of_empty_kb(self):
        self.assertEqual(KnowledgeBase.empty().subjects_list(), [])


class TestKnowledgeBaseLoader(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_explicit_path_is_loaded_first(self):
        path = self._write("kb.json", json.dumps({"data": {"nom_entreprise": "Test Co"}}))
        kb = load_knowledge_base(path)
        self.assertEqual(kb.company_name, "Test Co")

    def test_configured_path_is_used_when_no_explicit_path(self):
        path = self._write("configured.json", json.dumps({"data": {"nom_entreprise": "Configured"}}))
        with patch.object(Config, "KNOWLEDGE_BASE_PATH", path):
            kb = load_knowledge_base()
        self.assertEqual(kb.company_name, "Configured")

    def test_invalid_json_falls_back_to_bundled_copy(self):
        path = self._write("broken.json", "{not json")
        missing = os.path.join(self.tmpdir.name, "missing.json")
        with patch.object(Config, "KNOWLEDGE_BASE_PATH", missing):
            kb = load_knowledge_base(path)
        self.assertEqual(kb.company_name, "Gear9")
        self.assertTrue(kb.subjects)

    def test_bad_field_values_keep_the_rest_of_the_file(self):
        path = self._write("typos.json", json.dumps({"data": {
            "nom_entreprise": "Typo Co",
            "services": None,
            "realisations_et_recompenses": [
                {"titre": "Best Partner", "annee": "soon"},
                {"titre": "Innovation", "annee": "2021"},
            ],
            "subjects": {"careers": {"aliases": None, "answer_fr": "On recrute."},
                         "address": {"aliases": "vos locaux"}},
        }}))
        kb = load_knowledge_base(path)
        self.assertFalse(kb.is_empty)
        self.assertEqual(kb.company_name, "Typo Co")
        self.assertEqual(kb.services, ())
        self.assertIsNone(kb.awards[0].year)
        self.assertEqual(kb.awards[1].year, 2021)
        self.assertEqual(kb.subjects["careers"].aliases, ())
        self.assertEqual(kb.subjects["address"].aliases, ("vos locaux",))

    def test_invalid_record_falls_back(self):
        path = self._write("bad.json", json.dumps({"data": {"services": "not a list"}}))
        missing = os.path.join(self.tmpdir.name, "missing.json")
        with patch.object(Config, "KNOWLEDGE_BASE_PATH", missing), \
                patch.object(knowledge_base, "BUNDLED_PATH", missing):
            kb = load_knowledge_base(path)
        self.assertTrue(kb.is_empty)

    def test_nothing_found_gives_empty_kb(self):
        missing = os.path.join(self.tmpdir.name, "missing.json")
        with patch.object(Config, "KNOWLEDGE_BASE_PATH", missing), \
                patch.object(knowledge_base, "BUNDLED_PATH", missing):
            kb = load_knowledge_base(missing)
        self.assertTrue(kb.is_empty)
        self.assertEqual(kb.subjects_list(), [])

    def test_bundled_copy(self):
        kb = load_knowledge_base(BUNDLED_PATH)
        self.assertFalse(kb.is_empty)
        self.assertEqual(kb.address, "219 Bd Zerktouni, angle Bd Brahim Roudani, Casablanca")
        subjects = kb.subjects_list()
        self.assertEqual(subjects[:5], ["Gear9", "Address", "About", "Intégration Salesforce", "Salesforce Integration"])
        self.assertEqual(len(subjects), len(set(subjects)))


if __name__ == '__main__':
    unittest.main()
