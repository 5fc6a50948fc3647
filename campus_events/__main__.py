"""Command-line entry point: ``python -m campus_events <command> ...``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from .logging_config import logging as _  # noqa: F401  # ensure config applied early
from .errors import CampusEventsError
from .workflows.assistant import build_assistant

logger = logging.getLogger(__name__)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="campus_events", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="answer a natural-language question about events")
    ask.add_argument("user_id")
    ask.add_argument("query")

    rec = sub.add_parser("recommend", help="recommend events from registration history")
    rec.add_argument("user_id")

    hist = sub.add_parser("history", help="show recent chat turns")
    hist.add_argument("user_id")

    summ = sub.add_parser("summarize", help="write a short summary for one event")
    for name in ("title", "date", "time", "venue", "description"):
        summ.add_argument(f"--{name}", default="")
    summ.add_argument("--tags", default="", help="comma-separated tags")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        assistant = build_assistant()
    except EnvironmentError as exc:
        logger.error("Cannot start %s: %s", args.command, exc)
        print(json.dumps({"error_type": type(exc).__name__, "message": str(exc)}), file=sys.stderr)
        return 1

    try:
        if args.command == "ask":
            result = assistant.handle_query(args.user_id, args.query)
            _print_json(
                {
                    "response": result.response_text,
                    "contextType": result.context_type.value,
                    "relevantEvents": result.included_events,
                }
            )
            return 0 if result.success else 1

        if args.command == "recommend":
            recommendations = assistant.get_recommendations(args.user_id)
            _print_json({"recommendations": [item.to_dict() for item in recommendations]})
        elif args.command == "history":
            history = assistant.get_chat_history(args.user_id)
            _print_json(
                {
                    "history": [
                        {"query": turn.query, "response": turn.response, "timestamp": turn.timestamp}
                        for turn in history
                    ]
                }
            )
        else:
            fields = {
                "title": args.title,
                "date": args.date,
                "time": args.time,
                "venue": args.venue,
                "description": args.description,
                "tags": [tag.strip() for tag in args.tags.split(",") if tag.strip()],
            }
            _print_json({"summary": assistant.summarize_event(fields)})
    except CampusEventsError as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(json.dumps(exc.to_dict(), default=str), file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
