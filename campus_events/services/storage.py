"""Persistence layer: MongoDB collections for users, events and chat history."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..config import (
    CHAT_HISTORY_COLLECTION,
    CHAT_HISTORY_LIMIT,
    EVENTS_COLLECTION,
    USERS_COLLECTION,
)
from ..errors import (
    CampusEventsError,
    InvalidEvent,
    PermissionDenied,
    PersistenceFailure,
    StoreUnavailable,
    UnknownEvent,
    UnknownUser,
)
from ..models import ChatTurn, Event, EventType, Role, User
from ..utils.datetime_utils import get_current_timestamp

logger = logging.getLogger(__name__)

REQUIRED_EVENT_FIELDS = ("title", "venue", "description", "date", "time")
EDITABLE_EVENT_FIELDS = REQUIRED_EVENT_FIELDS + ("tags",)


@contextmanager
def _driver_errors(
    message: str,
    error_cls: Type[CampusEventsError] = StoreUnavailable,
    **context: Any,
) -> Iterator[None]:
    """Re-raise driver failures as *error_cls*."""
    try:
        yield
    except PyMongoError as exc:
        logger.error("%s: %s", message, exc)
        raise error_cls(message, exc, **context) from exc


def _object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def normalize_tags(tags: Any) -> List[str]:
    """Accept a comma-separated string or a sequence and return trimmed tags."""
    if tags is None:
        return []
    if isinstance(tags, str):
        items = tags.split(",")
    else:
        items = [str(tag) for tag in tags]
    return [tag.strip() for tag in items if tag and tag.strip()]


class EventStore:
    """Document-store adapter over the ``users``, ``events`` and ``chatHistory`` collections."""

    def __init__(self, db: Database) -> None:
        self._users = db[USERS_COLLECTION]
        self._events = db[EVENTS_COLLECTION]
        self._chat = db[CHAT_HISTORY_COLLECTION]

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def _user_document(self, user_id: str) -> Mapping[str, Any]:
        oid = _object_id(user_id)
        if oid is None:
            raise UnknownUser(user_id)
        with _driver_errors("Error getting user", user_id=user_id):
            doc = self._users.find_one({"_id": oid})
        if doc is None:
            raise UnknownUser(user_id)
        return doc

    def get_user(self, user_id: str) -> User:
        return User.from_document(self._user_document(user_id))

    def count_users(self, role: Role) -> int:
        with _driver_errors("Error counting users", role=role.value):
            return self._users.count_documents({"role": role.value})

    # ------------------------------------------------------------------
    # Event reads
    # ------------------------------------------------------------------

    def _find_events(self, query: Dict[str, Any], message: str) -> List[Event]:
        with _driver_errors(message):
            return [Event.from_document(doc) for doc in self._events.find(query)]

    def list_approved_events(self) -> List[Event]:
        return self._find_events({"approved": True}, "Error getting approved events")

    def list_pending_events(self) -> List[Event]:
        return self._find_events({"approved": False}, "Error getting pending events")

    def list_events_by_creator(self, creator_id: str) -> List[Event]:
        return self._find_events({"createdBy": creator_id}, "Error getting events")

    def list_user_registered_events(self, user_id: str) -> List[Event]:
        """Return the user's registered events in registration order.

        Raises :class:`UnknownUser` if the user does not exist.
        """
        user = self._user_document(user_id)
        event_ids = [str(event_id) for event_id in user.get("registeredEvents") or []]
        if not event_ids:
            return []

        oids = [oid for oid in (_object_id(event_id) for event_id in event_ids) if oid is not None]
        with _driver_errors("Error getting user registered events", user_id=user_id):
            docs = {str(doc["_id"]): doc for doc in self._events.find({"_id": {"$in": oids}})}

        missing = [event_id for event_id in event_ids if event_id not in docs]
        if missing:
            logger.warning("User %s references %d missing events", user_id, len(missing))
        return [Event.from_document(docs[event_id]) for event_id in event_ids if event_id in docs]

    def get_approved_event(self, event_id: str) -> Event:
        oid = _object_id(event_id)
        if oid is None:
            raise UnknownEvent(event_id)
        with _driver_errors("Error getting event", event_id=event_id):
            doc = self._events.find_one({"_id": oid, "approved": True})
        if doc is None:
            raise UnknownEvent(event_id)
        return Event.from_document(doc)

    def count_events(self) -> int:
        with _driver_errors("Error counting events"):
            return self._events.count_documents({})

    def is_enrolled(self, event_id: str, user_id: str) -> bool:
        return any(event.id == event_id for event in self.list_user_registered_events(user_id))

    # ------------------------------------------------------------------
    # Event writes
    # ------------------------------------------------------------------

    def create_event(self, fields: Mapping[str, Any], creator: User) -> Event:
        """Insert a new event; its type and approval follow the creator's role."""
        if creator.role == Role.ADMIN.value:
            event_type = EventType.ACADEMIC
        elif creator.role == Role.CLUB_LEAD.value:
            event_type = EventType.CLUB
        else:
            raise PermissionDenied("Insufficient permissions", role=creator.role)

        missing = [name for name in REQUIRED_EVENT_FIELDS if not fields.get(name)]
        if missing:
            raise InvalidEvent("All fields are required", missing=",".join(missing))

        doc: Dict[str, Any] = {name: fields[name] for name in REQUIRED_EVENT_FIELDS}
        doc.update(
            {
                "tags": normalize_tags(fields.get("tags")),
                "createdBy": creator.id,
                "type": event_type.value,
                "approved": event_type is EventType.ACADEMIC,
                "attendees": [],
                "createdAt": get_current_timestamp(),
            }
        )

        with _driver_errors("Error creating event", PersistenceFailure):
            result = self._events.insert_one(doc)
        logger.info("Stored %s event with _id=%s", event_type.value, result.inserted_id)
        return Event.from_document({**doc, "_id": result.inserted_id})

    def update_event(self, event_id: str, fields: Mapping[str, Any]) -> None:
        """Update editable fields only; type and approval are never touched."""
        oid = _object_id(event_id)
        if oid is None:
            raise UnknownEvent(event_id)

        update: Dict[str, Any] = {
            name: fields[name] for name in EDITABLE_EVENT_FIELDS if name in fields
        }
        if "tags" in update:
            update["tags"] = normalize_tags(update["tags"])
        update["updatedAt"] = get_current_timestamp()

        with _driver_errors("Error updating event", PersistenceFailure, event_id=event_id):
            result = self._events.update_one({"_id": oid}, {"$set": update})
        if result.matched_count == 0:
            raise UnknownEvent(event_id)

    def delete_event(self, event_id: str) -> None:
        oid = _object_id(event_id)
        if oid is None:
            raise UnknownEvent(event_id)
        with _driver_errors("Error deleting event", PersistenceFailure, event_id=event_id):
            result = self._events.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise UnknownEvent(event_id)

    def approve_event(self, event_id: str) -> bool:
        """Approve a pending event. Returns ``False`` if it was already approved."""
        oid = _object_id(event_id)
        if oid is None:
            raise UnknownEvent(event_id)

        with _driver_errors("Error approving event", PersistenceFailure, event_id=event_id):
            result = self._events.update_one(
                {"_id": oid, "approved": False},
                {"$set": {"approved": True, "approvedAt": get_current_timestamp()}},
            )
            if result.modified_count:
                logger.info("Approved event %s", event_id)
                return True
            exists = self._events.find_one({"_id": oid}, {"_id": 1})

        if exists is None:
            raise UnknownEvent(event_id)
        return False

    def enroll(self, event_id: str, user_id: str) -> bool:
        """Register *user_id* for an approved event. Returns ``False`` if already enrolled.

        The event and user documents are updated by two separate writes, so
        the pair is not atomic. Both use ``$addToSet``, which makes retrying
        after a partial failure safe.
        """
        event = self.get_approved_event(event_id)
        self._user_document(user_id)
        user_oid = _object_id(user_id)

        with _driver_errors("Error enrolling in event", PersistenceFailure, event_id=event_id):
            self._events.update_one(
                {"_id": _object_id(event.id)}, {"$addToSet": {"attendees": user_id}}
            )
        try:
            with _driver_errors("Error enrolling in event", PersistenceFailure, event_id=event_id):
                result = self._users.update_one(
                    {"_id": user_oid}, {"$addToSet": {"registeredEvents": event.id}}
                )
        except PersistenceFailure:
            logger.warning(
                "Enrollment half-applied: user %s is in attendees of event %s "
                "but registeredEvents was not updated",
                user_id,
                event.id,
            )
            raise
        return bool(result.modified_count)

    # ------------------------------------------------------------------
    # Chat history
    # ------------------------------------------------------------------

    def save_chat_turn(self, user_id: str, query: str, response: str) -> ChatTurn:
        turn = ChatTurn(user_id=user_id, query=query, response=response)
        with _driver_errors("Error saving chat message", PersistenceFailure, user_id=user_id):
            result = self._chat.insert_one(turn.to_document())
        turn.id = str(result.inserted_id)
        logger.info("Stored chat turn with _id=%s", result.inserted_id)
        return turn

    def get_chat_history(self, user_id: str, limit: int = CHAT_HISTORY_LIMIT) -> List[ChatTurn]:
        """Return the most recent turns for *user_id*, newest first."""
        with _driver_errors("Error getting chat history", user_id=user_id):
            cursor = self._chat.find({"userId": user_id}).sort("timestamp", DESCENDING).limit(limit)
            return [ChatTurn.from_document(doc) for doc in cursor]

__all__ = ["EventStore", "normalize_tags", "REQUIRED_EVENT_FIELDS"]
