"""Utility functions for the campus events project.

Re-exports the datetime helpers so that imports like
`from ..utils import parse_event_date` work as expected.
"""

from .datetime_utils import get_current_timestamp, parse_event_date  # noqa: F401

__all__ = [
    "get_current_timestamp",
    "parse_event_date",
]
