#!/usr/bin/env python3
"""
Generative Fallback Tests

PURPOSE:
    Covers the pieces used when no deterministic answer exists: grounding
    context and payload building, the Gemini client (with requests.post
    mocked) and the cleanup of generated replies.

USAGE:
    Run from project root: python -m pytest tests/test_generate.py -v
"""

import sys
import os
import unittest
from unittest.mock import MagicMock, patch

import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from gearbot.app.config import Config
from gearbot.app.generate import (
    EMPTY_TEXT_MESSAGE,
    MISSING_KEY_MESSAGE,
    QUOTA_MESSAGE_EN,
    QUOTA_MESSAGE_FR,
    UNEXPECTED_FORMAT_MESSAGE,
    GenerationClient,
    GenerationError,
    is_quota_error,
)
from gearbot.app.postprocess import Postprocessor
from gearbot.app.prompt_builder import ANSWER_IN_ENGLISH, ANSWER_IN_FRENCH, PromptBuilder
from gearbot.data.knowledge_base import BUNDLED_PATH, load_knowledge_base
from gearbot.data.models import KnowledgeBase


def fake_response(status_code=200, payload=None, content=b"{}", reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.content = content
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def gemini_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestGenerationClient(unittest.TestCase):

    def setUp(self):
        self.client = GenerationClient(api_key="test-key", model="gemini-test", timeout=5)

    def test_missing_api_key(self):
        client = GenerationClient(api_key="")
        with patch("gearbot.app.generate.requests.post") as post:
            self.assertEqual(client.generate_reply("Bonjour", None, "fr"), MISSING_KEY_MESSAGE)
            post.assert_not_called()

    @patch("gearbot.app.generate.requests.post")
    def test_successful_reply_is_cleaned(self, post):
        post.return_value = fake_response(payload=gemini_payload("Bonjour !\nGear9 est basée à Casablanca."))
        reply = self.client.generate_reply("Où est Gear9 ?", "Adresse: Casablanca", "fr")
        self.assertEqual(reply, "Gear9 est basée à Casablanca.")

        args, kwargs = post.call_args
        self.assertTrue(args[0].endswith("/gemini-test:generateContent"))
        self.assertEqual(kwargs["headers"]["x-goog-api-key"], "test-key")
        self.assertEqual(kwargs["timeout"], 5)
        user_text = kwargs["json"]["contents"][0]["parts"][0]["text"]
        self.assertIn(ANSWER_IN_FRENCH, user_text)
        self.assertIn("Adresse: Casablanca", user_text)
        self.assertIn("Où est Gear9 ?", user_text)

    @patch("gearbot.app.generate.requests.post")
    def test_rate_limit_gives_friendly_message(self, post):
        post.return_value = fake_response(429, {"error": {"message": "Resource has been exhausted"}}, reason="Too Many Requests")
        self.assertEqual(self.client.generate_reply("hello", None, "en"), QUOTA_MESSAGE_EN)
        self.assertEqual(self.client.generate_reply("bonjour", None, "fr"), QUOTA_MESSAGE_FR)

    @patch("gearbot.app.generate.requests.post")
    def test_quota_message_in_error_body(self, post):
        post.return_value = fake_response(400, {"error": {"message": "Quota exceeded for metric"}}, reason="Bad Request")
        self.assertEqual(self.client.generate_reply("hello", None, "EN"), QUOTA_MESSAGE_EN)

    @patch("gearbot.app.generate.requests.post")
    def test_other_http_errors_raise(self, post):
        post.return_value = fake_response(500, {"error": {"message": "Internal error"}}, reason="Server Error")
        with self.assertRaises(GenerationError) as ctx:
            self.client.generate_reply("hello", None, "en")
        self.assertIn("Gemini API error: Internal error", str(ctx.exception))

    @patch("gearbot.app.generate.requests.post")
    def test_http_error_without_json_body(self, post):
        post.return_value = fake_response(503, ValueError("no json"), content=b"", reason="Service Unavailable")
        with self.assertRaises(GenerationError) as ctx:
            self.client.generate_reply("hello", None, "en")
        self.assertIn("503 Service Unavailable", str(ctx.exception))

    @patch("gearbot.app.generate.requests.post")
    def test_network_error_raises(self, post):
        post.side_effect = requests.exceptions.ConnectionError("down")
        with self.assertRaises(GenerationError):
            self.client.generate_reply("hello", None, "en")

    @patch("gearbot.app.generate.requests.post")
    def test_unparseable_body_raises(self, post):
        post.return_value = fake_response(payload=ValueError("bad json"), content=b"<html>")
        with self.assertRaises(GenerationError):
            self.client.generate_reply("hello", None, "en")

    @patch("gearbot.app.generate.requests.post")
    def test_unexpected_shapes(self, post):
        post.return_value = fake_response(payload={"candidates": []})
        self.assertEqual(self.client.generate_reply("hello", None, "en"), UNEXPECTED_FORMAT_MESSAGE)
        post.return_value = fake_response(payload={"candidates": [{"content": {}}]})
        self.assertEqual(self.client.generate_reply("hello", None, "en"), UNEXPECTED_FORMAT_MESSAGE)
        post.return_value = fake_response(payload=gemini_payload("   "))
        self.assertEqual(self.client.generate_reply("hello", None, "en"), EMPTY_TEXT_MESSAGE)

    @patch("gearbot.app.generate.requests.post")
    def test_malformed_payloads_raise(self, post):
        malformed = [
            {"candidates": "oops"},
            {"candidates": [{"content": {"parts": [{"text": 5}]}}]},
            {"candidates": ["not a dict"]},
            {"candidates": [{"content": {"parts": "text"}}]},
            {"candidates": {"first": {}}},
        ]
        for payload in malformed:
            post.return_value = fake_response(payload=payload)
            with self.assertRaises(GenerationError, msg=str(payload)):
                self.client.generate_reply("hello", None, "en")

    def test_url_uses_configured_base(self):
        self.assertEqual(self.client.api_url, Config.gemini_url("gemini-test"))
        self.assertTrue(Config.gemini_url().endswith(f"/{Config.GEMINI_MODEL}:generateContent"))

    def test_is_quota_error(self):
        self.assertTrue(is_quota_error(429, None))
        self.assertTrue(is_quota_error(403, "Rate limit reached"))
        self.assertFalse(is_quota_error(500, "Internal error"))


class TestPromptBuilder(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.kb = load_knowledge_base(BUNDLED_PATH)

    def setUp(self):
        self.builder = PromptBuilder(system_prompt="Be brief.")

    def test_context_always_has_company_basics(self):
        context = self.builder.build_context("Quel temps fait-il ?", self.kb)
        self.assertIn("Nom: Gear9", context)
        self.assertIn("Adresse: 219 Bd Zerktouni", context)
        self.assertNotIn("Service:", context)

    def test_context_projects_filtered_by_sector(self):
        context = self.builder.build_context("Quels sont vos projets dans la finance ?", self.kb)
        self.assertIn("Projet: Bank of Africa", context)
        self.assertNotIn("inwi", context)

    def test_context_services_and_awards(self):
        context = self.builder.build_context("Which services and awards?", self.kb)
        self.assertIn("Service: Intégration Salesforce", context)
        self.assertIn("Récompense: Salesforce Partner Innovation Award — 2023 — Paris", context)

    def test_no_context_for_empty_kb(self):
        self.assertIsNone(self.builder.build_context("services", KnowledgeBase.empty()))

    def test_language_instruction(self):
        self.assertEqual(self.builder.language_instruction("bonjour", "EN"), ANSWER_IN_ENGLISH)
        self.assertEqual(self.builder.language_instruction("hello", "fr"), ANSWER_IN_FRENCH)
        self.assertEqual(self.builder.language_instruction("What is this?"), ANSWER_IN_ENGLISH)

    def test_payload(self):
        payload = self.builder.build_payload("Hello?", None, "en")
        self.assertEqual(payload["system_instruction"]["parts"][0]["text"], "Be brief.")
        self.assertEqual(payload["contents"][0]["role"], "user")
        self.assertEqual(payload["contents"][0]["parts"][0]["text"], f"{ANSWER_IN_ENGLISH}\n\nHello?")
        self.assertEqual(payload["generationConfig"], {"temperature": 0.6, "topP": 0.9, "topK": 40})


class TestPostprocessor(unittest.TestCase):

    def setUp(self):
        self.post = Postprocessor()

    def test_leading_greeting_removed(self):
        self.assertEqual(self.post.clean_response("Hello! Gear9 is in Casablanca."), "Gear9 is in Casablanca.")

    def test_second_greeting_line_removed(self):
        self.assertEqual(self.post.clean_response("Bonjour !\nSalut\nGear9 est à Casablanca."),
                         "Gear9 est à Casablanca.")

    def test_words_starting_like_greetings_are_kept(self):
        self.assertEqual(self.post.clean_response("History of Gear9: founded in 2019."),
                         "History of Gear9: founded in 2019.")

    def test_process_keeps_raw_text_when_only_greeting(self):
        self.assertEqual(self.post.clean_response("Bonjour !"), "")
        self.assertEqual(self.post.process_response("  Bonjour !  "), "Bonjour !")


if __name__ == '__main__':
    unittest.main()
