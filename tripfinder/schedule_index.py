"""
Per-trip ordered stop sequences built once from a loaded schedule.
"""
from typing import Dict, FrozenSet, List, Optional, Tuple

from tripfinder import config
from tripfinder.diagnostics import DUPLICATE_SEQUENCE, UNKNOWN_STOP, UNKNOWN_TRIP, Diagnostics
from tripfinder.exceptions import TripNotFoundError
from tripfinder.logger import get_logger
from tripfinder.schedule import Schedule
from tripfinder.stop_times import StopTime

logger = get_logger("schedule_index")


class ScheduleIndex:
    """
    Groups the schedule's stop times by trip and sorts each group by
    stop_sequence, so a trip's path, origin and terminus are dictionary
    lookups.

    The origin of a trip is its stop time at ``origin_sequence`` (10 in the
    feeds this was built for). Passing ``origin_sequence=None`` uses the
    lowest stop_sequence of each trip instead.
    """

    def __init__(self, schedule: Schedule, origin_sequence: Optional[int] = config.ORIGIN_SEQUENCE,
                 diagnostics: Optional[Diagnostics] = None):
        self.schedule = schedule
        self.origin_sequence = origin_sequence
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        grouped: Dict[str, List[StopTime]] = {}
        for stop_time in schedule.stop_times:
            grouped.setdefault(stop_time.trip_id, []).append(stop_time)
            self._check_references(stop_time)

        # sorted() is stable: repeated sequence numbers keep feed order
        self._sequences: Dict[str, Tuple[StopTime, ...]] = {
            trip_id: tuple(sorted(group, key=lambda st: st.stop_sequence))
            for trip_id, group in grouped.items()
        }

        self._origins: Dict[str, StopTime] = {}
        for trip_id, sequence in self._sequences.items():
            self._check_duplicate_sequences(trip_id, sequence)
            origin = self._find_origin(sequence)
            if origin is not None:
                self._origins[trip_id] = origin

        self._trips_by_origin_stop: Dict[str, List[str]] = {}
        self._trips_by_stop: Dict[str, set[str]] = {}
        for stop_time in schedule.stop_times:
            self._trips_by_stop.setdefault(stop_time.stop_id, set()).add(stop_time.trip_id)
            if self._origins.get(stop_time.trip_id) is stop_time:
                self._trips_by_origin_stop.setdefault(stop_time.stop_id, []).append(stop_time.trip_id)

        logger.debug(
            f"Indexed {len(self._sequences)} trips, {len(self._origins)} with an origin stop "
            f"at {self._origin_description()}"
        )

    def _origin_description(self) -> str:
        if self.origin_sequence is None:
            return "their lowest stop_sequence"
        return f"stop_sequence {self.origin_sequence}"

    def _check_references(self, stop_time: StopTime) -> None:
        if stop_time.trip_id not in self.schedule.trips:
            self.diagnostics.report(
                UNKNOWN_TRIP,
                f"Stop time references non-existent trip {stop_time.trip_id}",
                trip_id=stop_time.trip_id,
            )
        if stop_time.stop_id not in self.schedule.stops:
            self.diagnostics.report(
                UNKNOWN_STOP,
                f"Stop time for trip {stop_time.trip_id} references non-existent stop {stop_time.stop_id}",
                trip_id=stop_time.trip_id,
                stop_id=stop_time.stop_id,
            )

    def _check_duplicate_sequences(self, trip_id: str, sequence: Tuple[StopTime, ...]) -> None:
        for previous, current in zip(sequence, sequence[1:]):
            if previous.stop_sequence == current.stop_sequence:
                self.diagnostics.report(
                    DUPLICATE_SEQUENCE,
                    f"Trip {trip_id} repeats stop_sequence {current.stop_sequence}",
                    trip_id=trip_id,
                )

    def _find_origin(self, sequence: Tuple[StopTime, ...]) -> Optional[StopTime]:
        if not sequence:
            return None
        if self.origin_sequence is None:
            return sequence[0]
        for stop_time in sequence:
            if stop_time.stop_sequence == self.origin_sequence:
                return stop_time
        return None

    def trip_ids(self) -> Tuple[str, ...]:
        """All trips with stop times, in order of first appearance in the feed."""
        return tuple(self._sequences)

    def sequence_for(self, trip_id: str) -> Tuple[StopTime, ...]:
        """The trip's stop times ascending by stop_sequence; empty for unknown trips."""
        return self._sequences.get(trip_id, ())

    def last_stop(self, trip_id: str) -> StopTime:
        """
        The stop time with the highest stop_sequence of a trip.

        Raises:
            TripNotFoundError: If the trip has no stop times.
        """
        sequence = self._sequences.get(trip_id)
        if not sequence:
            raise TripNotFoundError(trip_id)
        return sequence[-1]

    def origin_stop(self, trip_id: str) -> Optional[StopTime]:
        return self._origins.get(trip_id)

    def terminus(self, trip_id: str) -> Optional[StopTime]:
        """
        The last stop of a trip visiting at least two stops. A trip with a
        single stop time goes nowhere, so it has no terminus.
        """
        sequence = self._sequences.get(trip_id, ())
        if len(sequence) < 2:
            return None
        return sequence[-1]

    def trips_starting_at(self, stop_id: str) -> Tuple[str, ...]:
        """Trips whose origin stop is ``stop_id``, in feed order."""
        return tuple(self._trips_by_origin_stop.get(stop_id, ()))

    def trips_visiting(self, stop_id: str) -> FrozenSet[str]:
        return frozenset(self._trips_by_stop.get(stop_id, ()))

    def origin_stop_ids(self) -> Tuple[str, ...]:
        """Distinct origin stop ids, in order of first appearance in the feed."""
        return tuple(self._trips_by_origin_stop)
