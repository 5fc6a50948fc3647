"""Browsing queries and dashboard statistics over fetched event lists."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..models import Event, Role
from ..utils.datetime_utils import get_current_timestamp, parse_event_date
from .selector import tags_match
from .storage import EventStore, normalize_tags

logger = logging.getLogger(__name__)


def _sorted_by_date(events: Iterable[Event]) -> List[Event]:
    dated = [(parse_event_date(event.date), event) for event in events]
    dated = [(when, event) for when, event in dated if when is not None]
    dated.sort(key=lambda pair: pair[0])
    return [event for _, event in dated]


def _same_day(event: Event, target: datetime) -> bool:
    when = parse_event_date(event.date)
    return when is not None and when.date() == target.date()


def filter_events(
    events: Sequence[Event],
    event_type: Optional[str] = None,
    date: Optional[str] = None,
    tags: Union[str, Sequence[str], None] = None,
) -> List[Event]:
    """Apply the optional type, calendar-day and tag filters in that order."""
    selected = list(events)

    if event_type:
        selected = [event for event in selected if event.type == event_type]

    if date:
        target = parse_event_date(date)
        if target is None:
            return []
        selected = [event for event in selected if _same_day(event, target)]

    if tags:
        search_tags = [tag.lower() for tag in normalize_tags(tags)]
        selected = [event for event in selected if tags_match(event.tags, search_tags)]

    return selected


def events_between(events: Sequence[Event], start: Any, end: Any) -> List[Event]:
    """Events dated within ``[start, end]``, sorted by date."""
    start_at = parse_event_date(start)
    end_at = parse_event_date(end)
    if start_at is None or end_at is None:
        raise ValueError("Start date and end date are required")

    in_range = []
    for event in events:
        when = parse_event_date(event.date)
        if when is not None and start_at <= when <= end_at:
            in_range.append(event)
    return _sorted_by_date(in_range)


def upcoming_events(
    events: Sequence[Event],
    days: int = 7,
    now: Optional[datetime] = None,
) -> List[Event]:
    """Events in the next *days* days, sorted by date."""
    start = now or get_current_timestamp()
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    return events_between(events, start, start + timedelta(days=days))


def creator_stats(events: Sequence[Event]) -> Dict[str, int]:
    """Dashboard counters for the events a club lead created."""
    published = sum(1 for event in events if event.approved)
    return {
        "totalEvents": len(events),
        "publishedEvents": published,
        "drafts": len(events) - published,
        "totalAttendance": sum(len(event.attendees) for event in events),
    }


def admin_stats(store: EventStore) -> Dict[str, int]:
    """Dashboard counters for administrators."""
    stats = {
        "totalStudents": store.count_users(Role.STUDENT),
        "activeClubs": store.count_users(Role.CLUB_LEAD),
        "totalEvents": store.count_events(),
        "pendingApproval": len(store.list_pending_events()),
    }
    logger.debug("Admin stats: %s", stats)
    return stats

__all__ = [
    "filter_events",
    "events_between",
    "upcoming_events",
    "creator_stats",
    "admin_stats",
]
