"""Request-level workflows."""

from .assistant import EventAssistant, FALLBACK_RESPONSE, build_assistant  # noqa: F401

__all__ = ["EventAssistant", "FALLBACK_RESPONSE", "build_assistant"]
