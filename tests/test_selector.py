import unittest
from datetime import datetime, timedelta, timezone
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from campus_events.models import ContextType, Event
from campus_events.services.selector import (
    filter_by_date_range,
    select,
    tags_match,
)
from campus_events.utils.datetime_utils import parse_event_date


class TestSelector(unittest.TestCase):

    def setUp(self):
        self.now = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
        self.hackathon = Event(id="e1", title="Hackathon", type="club", approved=True,
                               tags=["Hackathon2024", "AI"], date="2026-10-20")
        self.exam = Event(id="e2", title="Midterms", type="academic", approved=True,
                          tags=["exam"], date="2026-11-01")
        self.dance = Event(id="e3", title="Dance Night", type="club", approved=True,
                           tags=["Dance", "Music"], date="2026-12-24")
        self.match = Event(id="e4", title="Cricket Final", type="club", approved=True,
                           tags=["athletics"], date="TBD")
        self.approved = [self.hackathon, self.exam, self.dance, self.match]

    def test_registered_returns_registered_verbatim(self):
        registered = [self.dance, self.exam]
        result = select(ContextType.REGISTERED, "u1", registered, self.approved, self.now)
        self.assertEqual(result, registered)

    def test_week_window_bounds_are_inclusive(self):
        at_now = Event(id="a", date=self.now.isoformat())
        at_end = Event(id="b", date=(self.now + timedelta(days=7)).isoformat())
        past_end = Event(id="c", date=(self.now + timedelta(days=7, seconds=1)).isoformat())
        before = Event(id="d", date=(self.now - timedelta(seconds=1)).isoformat())

        result = select(ContextType.UPCOMING_WEEK, "u1", [], [at_now, at_end, past_end, before], self.now)

        self.assertEqual([event.id for event in result], ["a", "b"])

    def test_month_and_day_windows(self):
        month = select(ContextType.UPCOMING_MONTH, "u1", [], self.approved, self.now)
        self.assertEqual([event.id for event in month], ["e1", "e2"])

        tomorrow = Event(id="t", date=(self.now + timedelta(hours=20)).isoformat())
        day = select(ContextType.TODAY_TOMORROW, "u1", [], [self.hackathon, tomorrow], self.now)
        self.assertEqual([event.id for event in day], ["t"])

    def test_unparseable_dates_are_excluded_without_error(self):
        events = [
            Event(id="x", date="TBD"),
            Event(id="y", date=""),
            Event(id="z", date=None),
            Event(id="ok", date="October 19, 2026"),
        ]
        result = filter_by_date_range(events, 7, self.now)
        self.assertEqual([event.id for event in result], ["ok"])

    def test_relative_dates_are_excluded(self):
        events = [
            Event(id="weekday", date="Friday"),
            Event(id="clock", date="23:59"),
            Event(id="day", date="19"),
            Event(id="no-year", date="Oct 20"),
        ]
        result = select(ContextType.UPCOMING_WEEK, "u1", [], events, self.now)
        self.assertEqual(result, [])
        self.assertIsNone(parse_event_date("Friday"))
        self.assertIsNone(parse_event_date("23:59"))
        self.assertEqual(
            parse_event_date("October 19, 2026 18:30"),
            datetime(2026, 10, 19, 18, 30, tzinfo=timezone.utc),
        )

    def test_naive_now_is_treated_as_utc(self):
        naive_now = datetime(2026, 10, 18, 12, 0)
        result = filter_by_date_range([self.hackathon], 7, naive_now)
        self.assertEqual(result, [self.hackathon])

    def test_type_filters(self):
        academic = select(ContextType.ACADEMIC, "u1", [], self.approved, self.now)
        club = select(ContextType.CLUB, "u1", [], self.approved, self.now)
        self.assertEqual([event.id for event in academic], ["e2"])
        self.assertEqual([event.id for event in club], ["e1", "e3", "e4"])

    def test_tag_categories(self):
        technical = select(ContextType.TECHNICAL, "u1", [], self.approved, self.now)
        cultural = select(ContextType.CULTURAL, "u1", [], self.approved, self.now)
        sports = select(ContextType.SPORTS, "u1", [], self.approved, self.now)
        self.assertEqual([event.id for event in technical], ["e1"])
        self.assertEqual([event.id for event in cultural], ["e3"])
        self.assertEqual([event.id for event in sports], ["e4"])

    def test_tag_match_is_symmetric_and_case_insensitive(self):
        self.assertTrue(tags_match(["Hackathon2024"], ["hackathon"]))
        self.assertTrue(tags_match(["hackathon"], ["hack"]))
        self.assertTrue(tags_match(["HACK"], ["Hackathon"]))
        self.assertFalse(tags_match(["robotics"], ["music", "dance"]))
        self.assertFalse(tags_match([], ["music"]))

    def test_all_passes_through_in_input_order(self):
        result = select(ContextType.ALL, "u1", [], self.approved, self.now)
        self.assertEqual(result, self.approved)

    def test_empty_result_is_valid(self):
        self.assertEqual(select(ContextType.SPORTS, "u1", [], [], self.now), [])


if __name__ == '__main__':
    unittest.main()
