"""Centralised configuration for campus_events.

Environment variables are loaded once and all related constants are
grouped by service for easier maintenance.
"""

from __future__ import annotations

import os
from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Load environment variables from `.env` (if present)
# ---------------------------------------------------------------------------
load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


# ---------------------------------------------------------------------------
# Core credentials (from environment)
# ---------------------------------------------------------------------------
OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
MONGODB_URI: str | None = os.getenv("MONGODB_URI")

# ---------------------------------------------------------------------------
# Document store
# ---------------------------------------------------------------------------
MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "campus_events")
USERS_COLLECTION: str = "users"
EVENTS_COLLECTION: str = "events"
CHAT_HISTORY_COLLECTION: str = "chatHistory"

# ---------------------------------------------------------------------------
# Completion gateway
# ---------------------------------------------------------------------------
OPENAI_CHAT_MODEL: str = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT_SECONDS: float = _float_env("OPENAI_TIMEOUT_SECONDS", 30.0)
OPENAI_TEMPERATURE: float = _float_env("OPENAI_TEMPERATURE", 0.7)

# ---------------------------------------------------------------------------
# Query router limits
# Upper bound on events embedded in a single prompt; the rest are dropped
# in input order.
# ---------------------------------------------------------------------------
MAX_CONTEXT_EVENTS: int = _int_env("MAX_CONTEXT_EVENTS", 50)
RECOMMENDATION_LIMIT: int = _int_env("RECOMMENDATION_LIMIT", 5)
CHAT_HISTORY_LIMIT: int = _int_env("CHAT_HISTORY_LIMIT", 20)

# ---------------------------------------------------------------------------
# Re-exported names
# ---------------------------------------------------------------------------
__all__ = [
    # credentials
    "OPENAI_API_KEY",
    "MONGODB_URI",
    # storage
    "MONGODB_DATABASE",
    "USERS_COLLECTION",
    "EVENTS_COLLECTION",
    "CHAT_HISTORY_COLLECTION",
    # completion
    "OPENAI_CHAT_MODEL",
    "OPENAI_TIMEOUT_SECONDS",
    "OPENAI_TEMPERATURE",
    # router
    "MAX_CONTEXT_EVENTS",
    "RECOMMENDATION_LIMIT",
    "CHAT_HISTORY_LIMIT",
]
