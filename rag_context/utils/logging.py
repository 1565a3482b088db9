import logging
import os

logger = logging.getLogger("rag_context")
logger.setLevel(os.getenv("RAG_CONTEXT_LOG_LEVEL", "INFO").upper())

if not logger.handlers:
    h = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)


def set_level(level: str | int) -> None:
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
