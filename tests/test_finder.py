import pytest

from conftest import make_schedule, st
from tripfinder.finder import TripFinder
from tripfinder.schedule import load_schedule
from tripfinder.services import Calendar


def test_finder_answers_the_selection_flow(feed_dir):
    finder = TripFinder(load_schedule(str(feed_dir)))

    assert [stop.stop_id for stop in finder.list_start_stops()] == ["A", "B"]
    assert [stop.stop_id for stop in finder.list_end_stops("B")] == ["D"]
    assert [departure.trip_id for departure in finder.match_trips("B", "D")] == ["T4"]


def test_finder_filters_by_date(feed_dir):
    finder = TripFinder(load_schedule(str(feed_dir)))

    assert [d.trip_id for d in finder.match_trips("A", "C", date="2025-06-23")] == ["T1", "T2"]
    # WEEKDAY is removed on 2025-06-24
    assert finder.match_trips("A", "C", date="2025-06-24") == []
    assert finder.match_trips("A", "C", date="2025-07-01") == []


def test_finder_rejects_malformed_date(feed_dir):
    finder = TripFinder(load_schedule(str(feed_dir)))

    with pytest.raises(ValueError):
        finder.match_trips("A", "C", date="2025/06/23")


def test_finder_shares_diagnostics_between_queries():
    schedule = make_schedule(
        [st("T1", "A", 10, "08:00:00"), st("T1", "X", 20, "08:30:00")],
        stop_ids=["A"],
    )
    finder = TripFinder(schedule)

    reported = len(finder.diagnostics)
    assert reported >= 1

    assert finder.list_end_stops("A") == []
    assert finder.trip_waypoints("T1") is None
    assert finder.trip_waypoints("T1") is None
    assert all(issue.stop_id == "X" for issue in finder.diagnostics.issues)
    assert len(finder.diagnostics) == reported + 1


def test_finder_origin_minimum():
    schedule = make_schedule([
        st("T1", "A", 1, "08:00:00"),
        st("T1", "B", 2, "08:30:00"),
    ])

    assert TripFinder(schedule).list_start_stops() == []
    assert [s.stop_id for s in TripFinder(schedule, origin_sequence=None).list_start_stops()] == ["A"]


def test_finder_without_calendars_matches_nothing_on_a_date():
    schedule = make_schedule([st("T1", "A", 10, "08:00:00"), st("T1", "B", 20, "08:30:00")])
    finder = TripFinder(schedule)

    assert [d.trip_id for d in finder.match_trips("A", "B")] == ["T1"]
    assert finder.match_trips("A", "B", date="2025-06-23") == []


def test_finder_with_calendar_matches_on_a_date():
    schedule = make_schedule(
        [st("T1", "A", 10, "08:00:00"), st("T1", "B", 20, "08:30:00")],
        calendars=[Calendar("WEEKDAY", (True,) * 5 + (False,) * 2, "20250601", "20250630")],
    )

    assert [d.trip_id for d in TripFinder(schedule).match_trips("A", "B", date="2025-06-23")] == ["T1"]
