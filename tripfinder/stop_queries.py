"""
Queries that populate the start and end stop lists.
"""
from typing import Iterable, List

from tripfinder.diagnostics import UNKNOWN_STOP
from tripfinder.logger import get_logger
from tripfinder.schedule_index import ScheduleIndex
from tripfinder.stops import Stop

logger = get_logger("stop_queries")


class StopQueryEngine:
    def __init__(self, index: ScheduleIndex):
        self.index = index
        self.schedule = index.schedule
        self.diagnostics = index.diagnostics

    def _resolve_stops(self, stop_ids: Iterable[str]) -> List[Stop]:
        """Map stop ids to Stop records, dropping repeats and unknown ids."""
        resolved: List[Stop] = []
        seen: set[str] = set()
        for stop_id in stop_ids:
            if stop_id in seen:
                continue
            seen.add(stop_id)

            stop = self.schedule.stops.get(stop_id)
            if stop is None:
                self.diagnostics.report(
                    UNKNOWN_STOP,
                    f"Stop {stop_id} is referenced by stop_times but missing from stops",
                    stop_id=stop_id,
                )
                continue
            resolved.append(stop)
        return resolved

    def list_start_stops(self) -> List[Stop]:
        """
        Every distinct stop where at least one trip starts, in feed order.
        """
        start_stops = self._resolve_stops(self.index.origin_stop_ids())
        logger.debug(f"Found {len(start_stops)} start stops")
        return start_stops

    def list_end_stops(self, start_stop_id: str) -> List[Stop]:
        """
        Distinct last stops of the trips starting at ``start_stop_id``.

        Only the last stop of each trip counts; stops a trip merely passes
        through are not offered. A trip with a single stop time offers its
        own stop, although match_trips never returns such a trip. Unknown
        start stops give an empty list.
        """
        terminus_ids = [
            self.index.last_stop(trip_id).stop_id
            for trip_id in self.index.trips_starting_at(start_stop_id)
        ]

        end_stops = self._resolve_stops(terminus_ids)
        logger.debug(f"Found {len(end_stops)} end stops for start stop {start_stop_id}")
        return end_stops
