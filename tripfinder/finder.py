"""
Single entry point bundling the three schedule queries over one index.
"""
from typing import List, Optional

from tripfinder import config
from tripfinder.diagnostics import Diagnostics
from tripfinder.schedule import Schedule
from tripfinder.schedule_index import ScheduleIndex
from tripfinder.services import get_active_services
from tripfinder.stop_queries import StopQueryEngine
from tripfinder.stops import Stop
from tripfinder.trip_matcher import Departure, TripMatcher
from tripfinder.waypoints import Waypoints, trip_waypoints


class TripFinder:
    """
    Answers the start stop -> end stop -> departure questions for one loaded
    schedule. Build a new TripFinder when the feed is reloaded.
    """

    def __init__(self, schedule: Schedule, origin_sequence: Optional[int] = config.ORIGIN_SEQUENCE):
        self.schedule = schedule
        self.diagnostics = Diagnostics()
        self.index = ScheduleIndex(schedule, origin_sequence=origin_sequence, diagnostics=self.diagnostics)
        self.stop_queries = StopQueryEngine(self.index)
        self.trip_matcher = TripMatcher(self.index)

    def list_start_stops(self) -> List[Stop]:
        return self.stop_queries.list_start_stops()

    def list_end_stops(self, start_stop_id: str) -> List[Stop]:
        return self.stop_queries.list_end_stops(start_stop_id)

    def match_trips(self, start_stop_id: str, end_stop_id: str, date: Optional[str] = None) -> List[Departure]:
        """
        Departures between two stops, optionally limited to the services
        running on ``date`` (YYYY-MM-DD).

        Raises:
            ValueError: If ``date`` is not a valid YYYY-MM-DD date.
        """
        service_ids = None
        if date is not None:
            service_ids = get_active_services(self.schedule.calendars, self.schedule.calendar_dates, date)
        return self.trip_matcher.match_trips(start_stop_id, end_stop_id, service_ids)

    def trip_waypoints(self, trip_id: str, max_intermediate: int = config.MAX_WAYPOINTS) -> Optional[Waypoints]:
        return trip_waypoints(self.index, trip_id, max_intermediate)
