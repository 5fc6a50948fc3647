"""Prompt assembly for the completion gateway.

Events are reduced to their public fields before being embedded, so ids,
attendee lists and moderation state never leave the backend.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..config import MAX_CONTEXT_EVENTS
from ..models import ContextType, Event, EventRecord

logger = logging.getLogger(__name__)

Message = Dict[str, str]

SYSTEM_PERSONA = (
    "You are CampusSync AI, a helpful assistant for college students. You help"
    " students with information about college events, academics, and campus life."
)

SYSTEM_RULES = (
    "Instructions:\n"
    "1. Provide a helpful, friendly response to the user's query.\n"
    "2. If the user asks about events, include relevant event details from the provided data.\n"
    "3. Format event information clearly with titles, dates, times, venues, and descriptions.\n"
    "4. If no relevant events are found, politely inform the user.\n"
    "5. Keep responses concise but informative.\n"
    "6. Be encouraging and supportive.\n"
    "7. If the user asks about enrollment or registration, remind them they can enroll through the app.\n"
    "8. Use a conversational, student-friendly tone."
)

SUMMARY_INSTRUCTIONS = (
    "Please create a 2-3 sentence summary that would attract students to attend this"
    " event. Focus on the key benefits and what makes it interesting."
)


@dataclass(slots=True)
class PromptPayload:
    """Chat messages plus the metadata describing what was embedded."""

    messages: List[Message]
    context_type: Optional[ContextType] = None
    events: List[EventRecord] = field(default_factory=list)
    total_events: int = 0

    @property
    def truncated(self) -> bool:
        return self.total_events > len(self.events)


def _serialize_events(records: Sequence[EventRecord]) -> str:
    return json.dumps(list(records), indent=2, ensure_ascii=False, default=str)


def assemble(
    query: str,
    context_type: ContextType,
    events: Sequence[Event],
    max_events: int = MAX_CONTEXT_EVENTS,
) -> PromptPayload:
    """Build the prompt for *query* from the selected *events*.

    Only the first *max_events* events (input order) are embedded.
    """
    total = len(events)
    records = [event.projection() for event in events[: max(max_events, 0)]]
    if total > len(records):
        logger.warning(
            "Context for %s truncated to %d of %d events", context_type.value, len(records), total
        )
        count_line = f"- Available events: {len(records)} events (first {len(records)} of {total} matches)"
    else:
        count_line = f"- Available events: {len(records)} events"

    system_prompt = (
        f"{SYSTEM_PERSONA}\n\n"
        "Context Information:\n"
        f'- User is asking: "{query}"\n'
        f"- Context type: {context_type.value}\n"
        f"{count_line}\n\n"
        "Events data:\n"
        f"{_serialize_events(records)}\n\n"
        f"{SYSTEM_RULES}"
    )

    return PromptPayload(
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": f"User Query: {query}"},
        ],
        context_type=context_type,
        events=records,
        total_events=total,
    )


def assemble_summary(event_fields: Mapping[str, Any]) -> PromptPayload:
    """Build a single-event summary prompt from raw event fields."""
    tags = event_fields.get("tags") or []
    if isinstance(tags, str):
        tags_text = tags
    else:
        tags_text = ", ".join(str(tag) for tag in tags)

    prompt = (
        "Generate a concise, engaging summary for this college event:\n\n"
        "Event Details:\n"
        f"- Title: {event_fields.get('title', '')}\n"
        f"- Date: {event_fields.get('date', '')}\n"
        f"- Time: {event_fields.get('time', '')}\n"
        f"- Venue: {event_fields.get('venue', '')}\n"
        f"- Description: {event_fields.get('description', '')}\n"
        f"- Tags: {tags_text}\n\n"
        f"{SUMMARY_INSTRUCTIONS}"
    )
    return PromptPayload(messages=[{"role": "user", "content": prompt}])

__all__ = ["PromptPayload", "assemble", "assemble_summary", "SYSTEM_PERSONA", "SYSTEM_RULES"]
