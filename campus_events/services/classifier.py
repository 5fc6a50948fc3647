"""Keyword intent classification for natural-language event queries."""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

from ..models import ContextType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Ordered rules, first match wins. "technical" and "cultural" appear in the
# CLUB rule, so queries using only those words never reach the tag rules.
# ---------------------------------------------------------------------------
INTENT_RULES: Sequence[Tuple[Tuple[str, ...], ContextType]] = (
    (("my events", "registered", "enrolled"), ContextType.REGISTERED),
    (("next week", "this week"), ContextType.UPCOMING_WEEK),
    (("next month", "this month"), ContextType.UPCOMING_MONTH),
    (("today", "tomorrow"), ContextType.TODAY_TOMORROW),
    (("academic", "exam", "holiday"), ContextType.ACADEMIC),
    (("club", "cultural", "technical"), ContextType.CLUB),
    (("technical", "coding", "programming"), ContextType.TECHNICAL),
    (("cultural", "dance", "music"), ContextType.CULTURAL),
    (("sports", "game", "tournament"), ContextType.SPORTS),
)


def classify(query: str) -> ContextType:
    """Return the :class:`ContextType` for *query* (``ALL`` when nothing matches)."""
    lowered = (query or "").lower()
    for keywords, context_type in INTENT_RULES:
        if any(keyword in lowered for keyword in keywords):
            logger.debug("Classified query as %s", context_type.value)
            return context_type
    return ContextType.ALL

__all__ = ["INTENT_RULES", "classify"]
