"""Select the events relevant to a classified query."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from ..models import ContextType, Event, EventType
from ..utils.datetime_utils import get_current_timestamp, parse_event_date

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Selection settings
# ---------------------------------------------------------------------------
DATE_WINDOWS: Dict[ContextType, int] = {
    ContextType.UPCOMING_WEEK: 7,
    ContextType.UPCOMING_MONTH: 30,
    ContextType.TODAY_TOMORROW: 1,
}

TAG_KEYWORDS: Dict[ContextType, Sequence[str]] = {
    ContextType.TECHNICAL: ("technical", "coding", "programming", "hackathon"),
    ContextType.CULTURAL: ("cultural", "dance", "music", "art"),
    ContextType.SPORTS: ("sports", "game", "tournament", "athletics"),
}

TYPE_FILTERS: Dict[ContextType, EventType] = {
    ContextType.ACADEMIC: EventType.ACADEMIC,
    ContextType.CLUB: EventType.CLUB,
}


def tags_match(event_tags: Iterable[str], search_tags: Iterable[str]) -> bool:
    """Return ``True`` if any event tag contains, or is contained by, a search tag."""
    needles = [tag.lower() for tag in search_tags if tag]
    for tag in event_tags:
        if not isinstance(tag, str) or not tag:
            continue
        lowered = tag.lower()
        if any(needle in lowered or lowered in needle for needle in needles):
            return True
    return False


def filter_by_tags(events: Iterable[Event], search_tags: Sequence[str]) -> List[Event]:
    return [event for event in events if tags_match(event.tags, search_tags)]


def filter_by_date_range(
    events: Iterable[Event],
    days: int,
    now: Optional[datetime] = None,
) -> List[Event]:
    """Keep events dated within ``[now, now + days]``; unparseable dates are dropped."""
    start = now or get_current_timestamp()
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    end = start + timedelta(days=days)

    selected: List[Event] = []
    for event in events:
        event_date = parse_event_date(event.date)
        if event_date is None:
            logger.debug("Skipping event '%s' with unparseable date %r", event.title, event.date)
            continue
        if start <= event_date <= end:
            selected.append(event)
    return selected


def filter_by_type(events: Iterable[Event], event_type: EventType) -> List[Event]:
    return [event for event in events if event.type == event_type.value]


def select(
    context_type: ContextType,
    user_id: str,
    registered_events: Sequence[Event],
    approved_events: Sequence[Event],
    now: Optional[datetime] = None,
) -> List[Event]:
    """Return the subset of events matching *context_type*, in input order."""
    if context_type is ContextType.REGISTERED:
        selected = list(registered_events)
    elif context_type in DATE_WINDOWS:
        selected = filter_by_date_range(approved_events, DATE_WINDOWS[context_type], now)
    elif context_type in TYPE_FILTERS:
        selected = filter_by_type(approved_events, TYPE_FILTERS[context_type])
    elif context_type in TAG_KEYWORDS:
        selected = filter_by_tags(approved_events, TAG_KEYWORDS[context_type])
    else:
        selected = list(approved_events)

    logger.info(
        "Selected %d events for user %s (context=%s)",
        len(selected),
        user_id,
        context_type.value,
    )
    return selected

__all__ = [
    "DATE_WINDOWS",
    "TAG_KEYWORDS",
    "tags_match",
    "filter_by_tags",
    "filter_by_date_range",
    "filter_by_type",
    "select",
]
