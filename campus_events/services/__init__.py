"""Service layer modules grouping business logic by concern.

This module provides convenience re-exports so that callers can simply do for
example `from campus_events.services import classify` without having to
know which underlying module provides the symbol.
"""

from .classifier import classify  # noqa: F401
from .selector import select  # noqa: F401
from .assembler import PromptPayload, assemble, assemble_summary  # noqa: F401
from .recommendations import recommend  # noqa: F401
from .gateway import CompletionGateway, build_gateway  # noqa: F401
from .storage import EventStore  # noqa: F401
from .catalog import (  # noqa: F401
    admin_stats,
    creator_stats,
    events_between,
    filter_events,
    upcoming_events,
)

__all__ = [
    "classify",
    "select",
    "PromptPayload",
    "assemble",
    "assemble_summary",
    "recommend",
    "CompletionGateway",
    "build_gateway",
    "EventStore",
    "filter_events",
    "events_between",
    "upcoming_events",
    "creator_stats",
    "admin_stats",
]
