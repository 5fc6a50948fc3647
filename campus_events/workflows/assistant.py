"""End-to-end query handling: classify, select, assemble, complete, persist."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from ..logging_config import logging as _  # noqa: F401  # ensure config applied early
from ..clients.mongodb_client import get_database
from ..config import CHAT_HISTORY_LIMIT, MAX_CONTEXT_EVENTS, RECOMMENDATION_LIMIT
from ..models import ChatTurn, QueryResult, ScoredEvent
from ..services.assembler import assemble, assemble_summary
from ..services.classifier import classify
from ..services.gateway import CompletionGateway, build_gateway
from ..services.recommendations import recommend
from ..services.selector import select
from ..services.storage import EventStore
from ..utils.datetime_utils import get_current_timestamp

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = (
    "I'm sorry, I encountered an error while processing your request. "
    "Please try again or contact support if the problem persists."
)


class EventAssistant:
    """Answers event questions for a user on top of a store and a gateway."""

    def __init__(
        self,
        store: EventStore,
        gateway: CompletionGateway,
        max_context_events: int = MAX_CONTEXT_EVENTS,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._max_context_events = max_context_events

    def handle_query(self, user_id: str, query: str) -> QueryResult:
        """Answer *query* for *user_id*. Never raises.

        Any failure in the pipeline yields :data:`FALLBACK_RESPONSE`; the turn
        is recorded in chat history either way.
        """
        query = query or ""
        context_type = classify(query)
        logger.info("Processing query for user %s (context=%s)", user_id, context_type.value)

        try:
            registered = self._store.list_user_registered_events(user_id)
            approved = self._store.list_approved_events()
            relevant = select(context_type, user_id, registered, approved, get_current_timestamp())
            payload = assemble(query, context_type, relevant, self._max_context_events)
            response_text = self._gateway.complete(payload)
        except Exception as exc:
            logger.exception("AI processing error for user %s", user_id)
            self._record_turn(user_id, query, FALLBACK_RESPONSE)
            return QueryResult(
                response_text=FALLBACK_RESPONSE,
                context_type=context_type,
                included_events=[],
                success=False,
                error=str(exc),
            )

        self._record_turn(user_id, query, response_text)
        return QueryResult(
            response_text=response_text,
            context_type=context_type,
            included_events=payload.events,
        )

    def _record_turn(self, user_id: str, query: str, response_text: str) -> None:
        try:
            self._store.save_chat_turn(user_id, query, response_text)
        except Exception as exc:
            logger.error("Error saving chat message for user %s: %s", user_id, exc)

    def get_recommendations(self, user_id: str, limit: int = RECOMMENDATION_LIMIT) -> List[ScoredEvent]:
        """Rank unregistered events by tag overlap with the user's registrations.

        :class:`~campus_events.errors.UnknownUser` and store failures propagate.
        """
        registered = self._store.list_user_registered_events(user_id)
        approved = self._store.list_approved_events()
        return recommend(registered, approved, limit)

    def summarize_event(self, event_fields: Mapping[str, Any]) -> str:
        """Return a short promotional summary for a single event."""
        logger.info("Generating summary for event: %s", event_fields.get("title"))
        return self._gateway.complete(assemble_summary(event_fields)).strip()

    def get_chat_history(self, user_id: str, limit: int = CHAT_HISTORY_LIMIT) -> List[ChatTurn]:
        return self._store.get_chat_history(user_id, limit)


def build_assistant() -> EventAssistant:
    """Wire the assistant to the configured MongoDB database and OpenAI client."""
    return EventAssistant(EventStore(get_database()), build_gateway())

__all__ = ["EventAssistant", "FALLBACK_RESPONSE", "build_assistant"]
