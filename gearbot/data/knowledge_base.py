"""Knowledge base helpers: load the company data file once and share it read-only.

The data file is looked up at an explicit path, then at ``Config.KNOWLEDGE_BASE_PATH``,
then at the copy bundled with the package. A missing or unreadable file yields an
empty knowledge base instead of failing startup.
"""
from typing import List, Optional
import json
import os
import threading

from pydantic import ValidationError

from .models import KnowledgeBase
from ..app.config import Config
from ..utils.logger import get_logger

BUNDLED_PATH = os.path.join(os.path.dirname(__file__), "raw", "data.json")

logger = get_logger()


def _candidate_paths(path: Optional[str] = None) -> List[str]:
    candidates = []
    for p in (path, Config.KNOWLEDGE_BASE_PATH, BUNDLED_PATH):
        if p and p not in candidates:
            candidates.append(p)
    return candidates


def load_knowledge_base(path: Optional[str] = None) -> KnowledgeBase:
    for candidate in _candidate_paths(path):
        if not os.path.isfile(candidate):
            continue
        try:
            with open(candidate, encoding="utf-8") as f:
                document = json.load(f)
            kb = KnowledgeBase.from_document(document)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"[KB] Could not load knowledge base from {candidate}: {e}")
            continue
        logger.info(f"[KB] Loaded knowledge base from {candidate} (empty={kb.is_empty})")
        return kb
    logger.warning("[KB] No knowledge base file found; deterministic answers will report missing information")
    return KnowledgeBase.empty()


# Provide a module-level singleton for convenience
_kb: Optional[KnowledgeBase] = None
_kb_lock = threading.Lock()


def get_knowledge_base() -> KnowledgeBase:
    global _kb
    if _kb is None:
        with _kb_lock:
            if _kb is None:
                _kb = load_knowledge_base()
    return _kb
