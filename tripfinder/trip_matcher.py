"""
Matching trips between a chosen start and end stop.
"""
from dataclasses import dataclass
from typing import AbstractSet, List, Optional

from tripfinder.diagnostics import UNKNOWN_TRIP
from tripfinder.logger import get_logger
from tripfinder.schedule_index import ScheduleIndex

logger = get_logger("trip_matcher")


@dataclass(frozen=True)
class Departure:
    trip_id: str
    departure_time: str  # as written in the feed, may be past 24:00:00
    departure_seconds: int  # since the start of the service day


class TripMatcher:
    """
    Finds the trips that start at one stop and terminate at another.

    A trip matches ``(start, end)`` when its origin stop is ``start`` and its
    terminus is ``end``. Passing through ``end`` mid-route is not enough.
    When ``start == end`` the trip must be circular: its origin and terminus
    are the same stop.
    """

    def __init__(self, index: ScheduleIndex):
        self.index = index
        self.schedule = index.schedule
        self.diagnostics = index.diagnostics

    def _is_valid(self, trip_id: str, start_stop_id: str, end_stop_id: str) -> bool:
        terminus = self.index.terminus(trip_id)
        if terminus is None:
            return False

        if start_stop_id != end_stop_id:
            return terminus.stop_id == end_stop_id

        origin = self.index.origin_stop(trip_id)
        return origin is not None and origin.stop_id == terminus.stop_id == start_stop_id

    def _runs_in(self, trip_id: str, service_ids: AbstractSet[str]) -> bool:
        trip = self.schedule.trips.get(trip_id)
        if trip is None:
            self.diagnostics.report(
                UNKNOWN_TRIP,
                f"Stop time references non-existent trip {trip_id}",
                trip_id=trip_id,
            )
            return False
        return trip.service_id in service_ids

    def match_trips(self, start_stop_id: str, end_stop_id: str,
                    service_ids: Optional[AbstractSet[str]] = None) -> List[Departure]:
        """
        Departures from ``start_stop_id`` of every trip ending at ``end_stop_id``.

        Args:
            start_stop_id: Stop where the trip must start
            end_stop_id: Stop where the trip must end
            service_ids: If given, only trips of these services are kept

        Returns:
            List[Departure]: Sorted by departure time; trips departing at the
            same time keep their feed order.
        """
        trips_at_end = self.index.trips_visiting(end_stop_id)
        candidates = [
            trip_id for trip_id in self.index.trips_starting_at(start_stop_id)
            if trip_id in trips_at_end
        ]

        departures: List[Departure] = []
        for trip_id in candidates:
            if not self._is_valid(trip_id, start_stop_id, end_stop_id):
                continue
            if service_ids is not None and not self._runs_in(trip_id, service_ids):
                continue

            origin = self.index.origin_stop(trip_id)
            seconds = origin.departure_seconds
            if seconds is None:
                logger.debug(
                    f"Trip {trip_id} has no usable departure time at {start_stop_id}: "
                    f"{origin.departure_time!r}"
                )
                continue
            departures.append(Departure(
                trip_id=trip_id,
                departure_time=origin.departure_time,
                departure_seconds=seconds,
            ))

        departures.sort(key=lambda departure: departure.departure_seconds)
        logger.debug(
            f"Matched {len(departures)} of {len(candidates)} candidate trips "
            f"from {start_stop_id} to {end_stop_id}"
        )
        return departures
