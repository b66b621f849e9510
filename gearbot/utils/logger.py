"""Simple logger utility."""
import logging
import os

logger = logging.getLogger("gearbot")
if not logger.handlers:
    h = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)
    logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

def get_logger():
    return logger
