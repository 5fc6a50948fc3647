"""Domain models used across the project."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .utils.datetime_utils import get_current_timestamp

# Reduced record sent to the language model and returned to callers.
EventRecord = Dict[str, Any]


class EventType(str, Enum):
    ACADEMIC = "academic"
    CLUB = "club"


class Role(str, Enum):
    STUDENT = "Student"
    CLUB_LEAD = "Club Lead"
    ADMIN = "Admin"


class ContextType(str, Enum):
    """Intent label deciding which events are handed to the language model."""

    REGISTERED = "registered"
    UPCOMING_WEEK = "upcoming_week"
    UPCOMING_MONTH = "upcoming_month"
    TODAY_TOMORROW = "today_tomorrow"
    ACADEMIC = "academic"
    CLUB = "club"
    TECHNICAL = "technical"
    CULTURAL = "cultural"
    SPORTS = "sports"
    ALL = "all"


@dataclass(slots=True)
class Event:
    """A campus happening as stored in the ``events`` collection."""

    id: str = ""
    title: str = ""
    venue: str = ""
    description: str = ""
    date: Any = ""
    time: str = ""
    tags: List[str] = field(default_factory=list)
    type: str = EventType.CLUB.value
    approved: bool = False
    attendees: List[str] = field(default_factory=list)
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Event":
        """Build an :class:`Event` from a raw MongoDB document."""
        raw_id = doc.get("_id", doc.get("id", ""))
        return cls(
            id=str(raw_id) if raw_id is not None else "",
            title=doc.get("title", ""),
            venue=doc.get("venue", ""),
            description=doc.get("description", ""),
            date=doc.get("date", ""),
            time=doc.get("time", ""),
            tags=list(doc.get("tags") or []),
            type=doc.get("type", EventType.CLUB.value),
            approved=bool(doc.get("approved", False)),
            attendees=[str(a) for a in doc.get("attendees") or []],
            created_by=doc.get("createdBy"),
            created_at=doc.get("createdAt"),
            approved_at=doc.get("approvedAt"),
        )

    def projection(self) -> EventRecord:
        """Return the reduced record without ids, moderation state or attendees."""
        return {
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "venue": self.venue,
            "description": self.description,
            "tags": list(self.tags),
        }


@dataclass(slots=True)
class User:
    id: str
    name: str = ""
    email: str = ""
    role: str = Role.STUDENT.value
    registered_events: List[str] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "User":
        return cls(
            id=str(doc.get("_id", "")),
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            role=doc.get("role", Role.STUDENT.value),
            registered_events=[str(e) for e in doc.get("registeredEvents") or []],
        )


@dataclass(slots=True)
class ChatTurn:
    """One query/response exchange. Append-only."""

    user_id: str
    query: str
    response: str
    timestamp: datetime = field(default_factory=get_current_timestamp)
    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "query": self.query,
            "response": self.response,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "ChatTurn":
        return cls(
            id=str(doc["_id"]) if "_id" in doc else None,
            user_id=doc.get("userId", ""),
            query=doc.get("query", ""),
            response=doc.get("response", ""),
            timestamp=doc.get("timestamp"),
        )


@dataclass(slots=True)
class ScoredEvent:
    """A recommendation candidate with its tag-overlap score."""

    event: Event
    score: int

    def to_dict(self) -> EventRecord:
        record = self.event.projection()
        record["score"] = self.score
        return record


@dataclass(slots=True)
class QueryResult:
    """Outcome of a natural-language query. Always produced, even on failure."""

    response_text: str
    context_type: ContextType
    included_events: List[EventRecord] = field(default_factory=list)
    success: bool = True
    error: Optional[str] = None


__all__ = [
    "EventRecord",
    "EventType",
    "Role",
    "ContextType",
    "Event",
    "User",
    "ChatTurn",
    "ScoredEvent",
    "QueryResult",
]
