"""Top-level package for the campus events assistant.

This package exposes the assistant workflow so callers can do
`python -m campus_events ask ...` or
`from campus_events import build_assistant; build_assistant().handle_query(...)`.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("campus-events")
except _metadata.PackageNotFoundError:  # pragma: no cover – running from source
    __version__ = "0.0.0"

from .workflows.assistant import EventAssistant, build_assistant  # convenience re-export

__all__ = ["EventAssistant", "build_assistant", "__version__"]
