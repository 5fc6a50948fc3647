"""Exception hierarchy for campus_events.

All errors raised by the store adapter, the completion gateway and the
catalogue operations derive from :class:`CampusEventsError`, which keeps the
original driver/SDK exception as ``cause`` plus any keyword context.

    CampusEventsError
    ├── StoreUnavailable
    ├── PersistenceFailure
    ├── UnknownUser
    ├── UnknownEvent
    ├── PermissionDenied
    ├── InvalidEvent
    └── GatewayUnavailable
        └── GatewayTimeout
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CampusEventsError(Exception):
    """Base exception carrying a message, an optional cause and context."""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        **context: Any,
    ):
        self.message = message
        self.cause = cause
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"[{context_str}]")

        if self.cause:
            parts.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging purposes."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "cause_type": type(self.cause).__name__ if self.cause else None,
            **self.context,
        }


# ---------------------------------------------------------------------------
# Document store
# ---------------------------------------------------------------------------

class StoreUnavailable(CampusEventsError):
    """A read against the document store failed."""


class PersistenceFailure(CampusEventsError):
    """Writing a chat turn (or another document) failed."""


class UnknownUser(CampusEventsError):
    """The referenced user does not exist."""

    def __init__(self, user_id: str, cause: Optional[Exception] = None):
        self.user_id = user_id
        super().__init__("User not found", cause, user_id=user_id)


class UnknownEvent(CampusEventsError):
    """The referenced event does not exist."""

    def __init__(self, event_id: str, cause: Optional[Exception] = None):
        self.event_id = event_id
        super().__init__("Event not found", cause, event_id=event_id)


class PermissionDenied(CampusEventsError):
    """The acting user's role does not allow the operation."""


class InvalidEvent(CampusEventsError):
    """Submitted event fields are incomplete or malformed."""


# ---------------------------------------------------------------------------
# Completion gateway
# ---------------------------------------------------------------------------

class GatewayUnavailable(CampusEventsError):
    """The hosted language model could not produce a completion."""


class GatewayTimeout(GatewayUnavailable):
    """The hosted language model did not answer in time."""


__all__ = [
    "CampusEventsError",
    "StoreUnavailable",
    "PersistenceFailure",
    "UnknownUser",
    "UnknownEvent",
    "PermissionDenied",
    "InvalidEvent",
    "GatewayUnavailable",
    "GatewayTimeout",
]
