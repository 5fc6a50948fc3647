import unittest
from unittest.mock import patch, MagicMock
import io
import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from campus_events.__main__ import main
from campus_events.errors import UnknownUser
from campus_events.models import ContextType, Event, QueryResult, ScoredEvent


class TestCli(unittest.TestCase):

    @patch('campus_events.__main__.build_assistant')
    def test_ask_prints_response(self, mock_build_assistant):
        assistant = MagicMock()
        assistant.handle_query.return_value = QueryResult(
            response_text="Here you go",
            context_type=ContextType.ALL,
            included_events=[{"title": "Open Mic"}],
        )
        mock_build_assistant.return_value = assistant

        with patch('sys.stdout', new_callable=io.StringIO) as out:
            code = main(["ask", "u1", "what's on?"])

        self.assertEqual(code, 0)
        assistant.handle_query.assert_called_once_with("u1", "what's on?")
        printed = json.loads(out.getvalue())
        self.assertEqual(printed["contextType"], "all")
        self.assertEqual(printed["relevantEvents"], [{"title": "Open Mic"}])

    @patch('campus_events.__main__.build_assistant')
    def test_recommend(self, mock_build_assistant):
        assistant = MagicMock()
        assistant.get_recommendations.return_value = [ScoredEvent(Event(title="Robot Wars"), 3)]
        mock_build_assistant.return_value = assistant

        with patch('sys.stdout', new_callable=io.StringIO) as out:
            code = main(["recommend", "u1"])

        self.assertEqual(code, 0)
        printed = json.loads(out.getvalue())
        self.assertEqual(printed["recommendations"][0]["score"], 3)

    @patch('campus_events.__main__.build_assistant')
    def test_unknown_user_exits_non_zero(self, mock_build_assistant):
        assistant = MagicMock()
        assistant.get_recommendations.side_effect = UnknownUser("ghost")
        mock_build_assistant.return_value = assistant

        with patch('sys.stderr', new_callable=io.StringIO) as err:
            code = main(["recommend", "ghost"])

        self.assertEqual(code, 1)
        self.assertIn("UnknownUser", err.getvalue())

    @patch('campus_events.__main__.build_assistant')
    def test_missing_environment_exits_non_zero(self, mock_build_assistant):
        mock_build_assistant.side_effect = EnvironmentError("MONGODB_URI environment variable is not set.")

        with patch('sys.stderr', new_callable=io.StringIO) as err:
            code = main(["history", "u1"])

        self.assertEqual(code, 1)
        printed = json.loads(err.getvalue())
        self.assertIn("MONGODB_URI", printed["message"])

    @patch('campus_events.__main__.build_assistant')
    def test_summarize_passes_fields(self, mock_build_assistant):
        assistant = MagicMock()
        assistant.summarize_event.return_value = "Great event."
        mock_build_assistant.return_value = assistant

        with patch('sys.stdout', new_callable=io.StringIO):
            code = main(["summarize", "--title", "Expo", "--tags", "ai, robotics"])

        self.assertEqual(code, 0)
        fields = assistant.summarize_event.call_args[0][0]
        self.assertEqual(fields["title"], "Expo")
        self.assertEqual(fields["tags"], ["ai", "robotics"])


if __name__ == '__main__':
    unittest.main()
