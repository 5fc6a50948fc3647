"""Utility functions for working with dates and times."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

__all__ = [
    "get_current_timestamp",
    "parse_event_date",
]

# Two defaults differing in every date part but sharing midnight.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def get_current_timestamp() -> datetime:
    """Return the current UTC datetime with micro-second precision.

    This object can be stored directly in MongoDB where it will be written as
    a BSON Date.
    """
    return datetime.now(tz=timezone.utc)


def parse_event_date(value: Any) -> Optional[datetime]:
    """Resolve a stored event ``date`` to an aware UTC datetime.

    Events are created from form input, so ``date`` is usually an ISO string
    (``2026-10-20``) but may also be a BSON date or a free-form string such as
    ``"October 20, 2026"``. Values without an offset are taken as UTC.
    Returns ``None`` when the value cannot be interpreted or does not name a
    full calendar date (``"Friday"``, ``"23:59"``, ``"Dec 31"``).
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            try:
                parsed = date_parser.parse(value, default=_DEFAULT_A)
                if parsed != date_parser.parse(value, default=_DEFAULT_B):
                    # A date part was filled from the default, so the value is relative.
                    return None
            except (ValueError, OverflowError):
                return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
