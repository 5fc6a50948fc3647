"""Tag-overlap recommendations from a user's registration history."""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Sequence

from ..config import RECOMMENDATION_LIMIT
from ..models import Event, ScoredEvent

logger = logging.getLogger(__name__)


def tag_frequencies(registered_events: Sequence[Event]) -> Counter:
    """Count every tag occurrence across *registered_events* (repeats count)."""
    return Counter(tag for event in registered_events for tag in event.tags)


def recommend(
    registered_events: Sequence[Event],
    approved_events: Sequence[Event],
    limit: int = RECOMMENDATION_LIMIT,
) -> List[ScoredEvent]:
    """Rank approved events the user has not registered for.

    Ties keep the order of *approved_events*.
    """
    frequencies = tag_frequencies(registered_events)
    registered_ids = {event.id for event in registered_events}

    scored = [
        ScoredEvent(event=event, score=sum(frequencies.get(tag, 0) for tag in event.tags))
        for event in approved_events
        if event.id not in registered_ids
    ]
    # list.sort is stable
    scored.sort(key=lambda item: item.score, reverse=True)

    logger.info(
        "Scored %d candidate events from %d distinct tags", len(scored), len(frequencies)
    )
    return scored[:limit]

__all__ = ["tag_frequencies", "recommend"]
